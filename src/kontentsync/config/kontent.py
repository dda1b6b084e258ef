"""Kontent project configuration values."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from .env import env_flag, env_list, optional_env_var, require_env_vars
from .errors import ConfigurationError
from .http_resilience import RateLimit, ResilienceConfig

KONTENT_DELIVERY_URL = "https://deliver.kontent.ai"
KONTENT_PREVIEW_URL = "https://preview-deliver.kontent.ai"
KONTENT_TIMEOUT_SECONDS = 15.0


def build_kontent_resilience(*, use_preview_url: bool = False) -> ResilienceConfig:
    return ResilienceConfig(
        name="kontent-preview" if use_preview_url else "kontent-delivery",
        base_url=KONTENT_PREVIEW_URL if use_preview_url else KONTENT_DELIVERY_URL,
        timeout_seconds=KONTENT_TIMEOUT_SECONDS,
        ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
    )


@dataclass(frozen=True)
class KontentConfig:
    """Settings for one Kontent project, fixed for the lifetime of a run.

    ``language_codenames`` is ordered; the order is the processing priority of
    the per-language fan-out. ``item_types`` lists the content-item node types
    registered in the node store (for example ``kontent_item_article``).
    """

    project_id: str
    language_codenames: tuple[str, ...]
    include_raw_content: bool = False
    include_taxonomies: bool = False
    include_types: bool = False
    item_types: tuple[str, ...] = ()
    use_preview_url: bool = False
    authorization_key: str | None = None
    resilience: ResilienceConfig = field(default_factory=build_kontent_resilience)

    def __post_init__(self) -> None:
        if not self.project_id.strip():
            raise ConfigurationError("Kontent project id must not be blank")
        if not self.language_codenames:
            raise ConfigurationError("At least one Kontent language codename is required")
        if self.use_preview_url and not self.authorization_key:
            raise ConfigurationError("The Kontent preview API requires an authorization key")
        if self.use_preview_url and self.resilience.base_url == KONTENT_DELIVERY_URL:
            # preview keys are only accepted by the preview host
            object.__setattr__(
                self,
                "resilience",
                replace(self.resilience, name="kontent-preview", base_url=KONTENT_PREVIEW_URL),
            )

    def with_item_types(self, item_types: tuple[str, ...]) -> KontentConfig:
        return replace(self, item_types=item_types)


def get_kontent_config(*, resilience: ResilienceConfig | None = None) -> KontentConfig:
    values = require_env_vars(("KONTENT_PROJECT_ID", "KONTENT_LANGUAGE_CODENAMES"))
    use_preview_url = env_flag("KONTENT_USE_PREVIEW_URL")
    return KontentConfig(
        project_id=values["KONTENT_PROJECT_ID"],
        language_codenames=env_list("KONTENT_LANGUAGE_CODENAMES"),
        include_raw_content=env_flag("KONTENT_INCLUDE_RAW_CONTENT"),
        include_taxonomies=env_flag("KONTENT_INCLUDE_TAXONOMIES"),
        include_types=env_flag("KONTENT_INCLUDE_TYPES"),
        item_types=env_list("KONTENT_ITEM_TYPES"),
        use_preview_url=use_preview_url,
        authorization_key=optional_env_var("KONTENT_AUTHORIZATION_KEY"),
        resilience=resilience or build_kontent_resilience(use_preview_url=use_preview_url),
    )
