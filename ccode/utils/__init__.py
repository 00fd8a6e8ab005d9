# -*- coding: utf-8 -*-
from .fs import copy_atomic, read_json, write_json_atomic

__all__ = ["copy_atomic", "read_json", "write_json_atomic"]
