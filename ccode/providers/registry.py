# -*- coding: utf-8 -*-
"""Built-in provider kinds and registry."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Callable, Dict, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from .models import Provider


class ProviderKind(str, Enum):
    """Kind of upstream API a provider talks to."""

    OPENAI = "openai"
    OPENROUTER = "openrouter"
    DEEPSEEK = "deepseek"
    GEMINI = "gemini"
    QWEN = "qwen"
    CUSTOM = "custom"


TransformerFactory = Callable[[Sequence[str]], Optional[dict]]


class ProviderKindDefinition(BaseModel):
    """Static behaviour record for one provider kind."""

    model_config = ConfigDict(frozen=True)

    kind: ProviderKind
    name: str = Field(..., description="Human-readable kind name")
    default_models: List[str] = Field(default_factory=list)
    url_template: str = Field(
        default="",
        description="Example API URL shown as a hint",
    )
    required_url_path: str = Field(
        default="",
        description="Fragment the API URL must contain (empty: no rule)",
    )
    hints: List[str] = Field(default_factory=list)
    make_transformer: Optional[TransformerFactory] = Field(
        default=None,
        exclude=True,
    )

    def transformer_for(self, models: Sequence[str]) -> Optional[dict]:
        """Return the transformer payload for *models*, if the kind has one."""
        if self.make_transformer is None:
            return None
        return self.make_transformer(models)

    def check_url(self, url: str) -> Optional[str]:
        """Return a problem description if *url* breaks the kind's rule."""
        if self.required_url_path and self.required_url_path not in url:
            return (
                f"{self.name} API URL should contain "
                f"'{self.required_url_path}'"
            )
        return None


# ---------------------------------------------------------------------------
# Transformer derivation
# ---------------------------------------------------------------------------


def _with_model_overrides(
    base: dict,
    models: Sequence[str],
    matches: Callable[[str], bool],
    directive: dict,
) -> dict:
    """Merge a per-model *directive* for every model *matches* accepts."""
    transformer = dict(base)
    for model in models:
        if matches(model):
            transformer[model] = dict(directive)
    return transformer


def _openrouter_transformer(models: Sequence[str]) -> dict:
    return {"use": ["openrouter"]}


def _gemini_transformer(models: Sequence[str]) -> dict:
    return {"use": ["gemini"]}


def _deepseek_transformer(models: Sequence[str]) -> dict:
    # deepseek-chat needs tool use rewritten
    return _with_model_overrides(
        {"use": ["deepseek"]},
        models,
        lambda m: "deepseek-chat" in m,
        {"use": ["tooluse"]},
    )


def _qwen_transformer(models: Sequence[str]) -> dict:
    return _with_model_overrides(
        {"use": [["maxtoken", {"max_tokens": 65536}], "enhancetool"]},
        models,
        lambda m: "Thinking" in m or "thinking" in m,
        {"use": ["reasoning"]},
    )


# ---------------------------------------------------------------------------
# Kind definitions
# ---------------------------------------------------------------------------

KIND_OPENAI = ProviderKindDefinition(
    kind=ProviderKind.OPENAI,
    name="OpenAI compatible",
    default_models=["gpt-4o", "gpt-4o-mini", "gpt-3.5-turbo"],
    url_template="https://api.openai.com/v1/chat/completions",
    required_url_path="/chat/completions",
    hints=[
        "Standard OpenAI API format",
        "No transformer needed",
        "Works with most third-party compatible APIs",
    ],
)

KIND_OPENROUTER = ProviderKindDefinition(
    kind=ProviderKind.OPENROUTER,
    name="OpenRouter",
    default_models=[
        "anthropic/claude-3.5-sonnet",
        "google/gemini-2.5-pro-preview",
        "anthropic/claude-sonnet-4",
    ],
    url_template="https://openrouter.ai/api/v1/chat/completions",
    required_url_path="/chat/completions",
    hints=[
        "Routes to many upstream models",
        "Adds the openrouter transformer",
        "Web search needs the ':online' suffix on the model",
    ],
    make_transformer=_openrouter_transformer,
)

KIND_DEEPSEEK = ProviderKindDefinition(
    kind=ProviderKind.DEEPSEEK,
    name="DeepSeek",
    default_models=["deepseek-chat", "deepseek-reasoner"],
    url_template="https://api.deepseek.com/chat/completions",
    required_url_path="/chat/completions",
    hints=[
        "DeepSeek API",
        "Adds the deepseek transformer",
        "deepseek-chat models get the tooluse transformer",
    ],
    make_transformer=_deepseek_transformer,
)

KIND_GEMINI = ProviderKindDefinition(
    kind=ProviderKind.GEMINI,
    name="Gemini",
    default_models=["gemini-2.5-flash", "gemini-2.5-pro"],
    url_template="https://generativelanguage.googleapis.com/v1beta/models/",
    required_url_path="/v1beta/models/",
    hints=[
        "Google Gemini API",
        "API path format: /v1beta/models/",
        "Adds the gemini transformer",
    ],
    make_transformer=_gemini_transformer,
)

KIND_QWEN = ProviderKindDefinition(
    kind=ProviderKind.QWEN,
    name="Qwen",
    default_models=[
        "qwen3-coder-plus",
        "Qwen/Qwen3-Coder-480B-A35B-Instruct",
        "Qwen/Qwen3-235B-A22B-Thinking-2507",
    ],
    url_template=(
        "https://dashscope.aliyuncs.com/compatible-mode/v1/chat/completions"
    ),
    required_url_path="/chat/completions",
    hints=[
        "Qwen model family",
        "max_tokens capped at 65536",
        "Thinking models get the reasoning transformer",
        "Enhanced tool calling",
    ],
    make_transformer=_qwen_transformer,
)

KIND_CUSTOM = ProviderKindDefinition(
    kind=ProviderKind.CUSTOM,
    name="Custom",
    default_models=["custom-model"],
    url_template="https://your-api-url/v1/chat/completions",
    hints=[
        "Custom API endpoint",
        "Configure a transformer by hand if needed",
    ],
)

# Registry: ProviderKind -> ProviderKindDefinition
PROVIDER_KINDS: Dict[ProviderKind, ProviderKindDefinition] = {
    d.kind: d
    for d in (
        KIND_OPENAI,
        KIND_OPENROUTER,
        KIND_DEEPSEEK,
        KIND_GEMINI,
        KIND_QWEN,
        KIND_CUSTOM,
    )
}


def get_provider_kind(kind) -> Optional[ProviderKindDefinition]:
    """Return the definition for *kind* (enum or string), or None."""
    try:
        return PROVIDER_KINDS.get(ProviderKind(kind))
    except ValueError:
        return None


def list_provider_kinds() -> List[ProviderKindDefinition]:
    """Return all registered provider kind definitions."""
    return list(PROVIDER_KINDS.values())


# ---------------------------------------------------------------------------
# Route recommendations
# ---------------------------------------------------------------------------

MAX_RECOMMENDATIONS = 3


def _first_matching(models: Sequence[str], *needles: str) -> Optional[str]:
    for model in models:
        if any(n in model for n in needles):
            return model
    return None


def recommend_routes(
    category: str,
    providers: Sequence["Provider"],
) -> List[tuple]:
    """Suggest ``(route, reason)`` pairs for one route category.

    *category* is a wire name: ``background``, ``think``, ``longContext``
    or ``webSearch``. Providers without a kind are skipped.
    """
    out: List[tuple] = []
    for p in providers:
        kind = p.provider_type
        if kind is None or not p.models:
            continue
        model: Optional[str] = None
        reason = ""
        suffix = ""
        if category == "background":
            if kind == ProviderKind.OPENAI:
                model = _first_matching(p.models, "gpt-3.5", "4o-mini")
                reason = "fast responses"
            elif kind == ProviderKind.DEEPSEEK:
                model, reason = p.models[0], "cost effective"
        elif category == "think":
            if kind == ProviderKind.DEEPSEEK:
                model = _first_matching(p.models, "reasoner")
                reason = "strong reasoning"
            elif kind == ProviderKind.QWEN:
                model = _first_matching(p.models, "Thinking", "thinking")
                reason = "chain-of-thought"
            elif kind == ProviderKind.OPENROUTER:
                model = _first_matching(p.models, "claude", "o1")
                reason = "logical analysis"
        elif category == "longContext":
            if kind == ProviderKind.QWEN:
                model, reason = p.models[0], "very long context"
            elif kind == ProviderKind.GEMINI:
                model = _first_matching(p.models, "pro")
                reason = "large inputs"
            elif kind == ProviderKind.OPENROUTER:
                model = _first_matching(p.models, "claude")
                reason = "document analysis"
        elif category == "webSearch":
            model = p.models[0]
            if kind == ProviderKind.OPENROUTER:
                suffix, reason = ":online", "live search"
            else:
                reason = "basic web queries"
        if model:
            out.append((f"{p.name},{model}{suffix}", reason))
    return out[:MAX_RECOMMENDATIONS]
