"""Prepper-backed configuration loader for Chatglot."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal, Mapping, Sequence

from dotenv import dotenv_values
from prepper import (
    Field,
    IoError,
    SchemaError,
    SchemaModel,
    ValidationError,
    model_validator,
)
from prepper.config import ConfigInstance
from prepper.loaders import _parse_file, _path_to_source, discover_file_paths
from prepper.merge import merge_layer
from prepper.provenance import ProvenanceRecorder

from .errors import TranslationProviderConfigurationError

APP_NAME = "Chatglot"

DEFAULT_ENDPOINT = "https://translate.googleapis.com/translate_a/single"
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; WOW64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/94.0.4592.0 Safari/537.36"
)


class ChatglotConfig(SchemaModel):
    """Schema describing all supported configuration options."""

    CHATGLOT_PROVIDER: Literal["google", "echo"] = Field(
        default="google",
        description="Translation backend selection.",
    )
    CHATGLOT_DEFAULT_LANGUAGE: str = Field(
        default="en",
        description="Target language used when a caller does not name one.",
    )
    CHATGLOT_ENDPOINT: str = Field(default=DEFAULT_ENDPOINT)
    CHATGLOT_CLIENT_ID: str = Field(default="gtx")
    CHATGLOT_USER_AGENT: str = Field(default=DEFAULT_USER_AGENT)
    CHATGLOT_REQUEST_TIMEOUT: float | None = Field(default=None)
    CHATGLOT_PROVIDER_DEBUG: bool = Field(default=False)

    @model_validator(mode="before")
    def _normalise_provider(data: Any) -> Any:
        if isinstance(data, dict):
            raw_value = data.get("CHATGLOT_PROVIDER")
            if isinstance(raw_value, str):
                normalized = raw_value.strip().lower().replace("-", "_")
                synonyms = {
                    "google_translate": "google",
                    "gtx": "google",
                    "noop": "echo",
                    "mock": "echo",
                }
                normalized = synonyms.get(normalized, normalized)
                if normalized not in {"google", "echo"}:
                    normalized = "google"
                data["CHATGLOT_PROVIDER"] = normalized
        return data


@lru_cache(maxsize=1)
def _load_config_instance(app_dir: Path | None = None) -> ConfigInstance:
    """Load configuration layers once and cache the immutable instance."""

    base_dir = app_dir or Path.cwd()
    try:
        provenance = ProvenanceRecorder()
        combined = _load_discovered_yaml(app_dir=base_dir, provenance=provenance)
        _merge_env_sources(
            combined,
            provenance=provenance,
            app_dir=base_dir,
            schema=ChatglotConfig,
        )

        model = ChatglotConfig.validate(combined, provenance=provenance)
        _validate_request_settings(model)

        instance = ConfigInstance(
            model=model,
            provenance=provenance,
            env_prefix=None,
            schema_cls=ChatglotConfig,
        )
        return instance
    except IoError as exc:
        raise TranslationProviderConfigurationError(
            f"Configuration files could not be read: {exc}"
        ) from exc
    except SchemaError as exc:
        raise TranslationProviderConfigurationError(
            f"Configuration schema error: {exc}"
        ) from exc
    except ValidationError as exc:
        issues = _format_validation_errors(exc.to_dict())
        raise TranslationProviderConfigurationError(issues) from exc


def _load_discovered_yaml(
    *,
    app_dir: Path,
    provenance: ProvenanceRecorder,
) -> dict[str, Any]:
    """Load YAML configuration files using Prepper's discovery rules."""

    result: dict[str, Any] = {}
    discovered = discover_file_paths(
        APP_NAME,
        "yaml",
        app_dir=app_dir,
        extra_paths=None,
    )
    for path, label in discovered:
        parsed = _parse_file(path, "yaml")
        if not isinstance(parsed, Mapping):
            raise IoError(
                f"Invalid configuration file {path}: expected a mapping at the root."
            )
        source = _path_to_source(label, "yaml", path)
        merge_layer(result, parsed, provenance=provenance, source=source, layer="file")
    return result


def _env_layers(app_dir: Path) -> list[tuple[str, Mapping[str, Any]]]:
    """Return the environment layers in increasing precedence."""

    layers: list[tuple[str, Mapping[str, Any]]] = []
    dotenv_path = app_dir / ".env"
    if dotenv_path.exists():
        layers.append((".env", dotenv_values(dotenv_path)))
    layers.append(("process", os.environ))
    return layers


def _merge_env_sources(
    target: dict[str, Any],
    *,
    provenance: ProvenanceRecorder,
    app_dir: Path,
    schema: type[SchemaModel],
) -> None:
    """Merge .env and process variables named like schema fields."""

    fields = schema.__field_infos__
    for label, values in _env_layers(app_dir):
        for key in sorted(k for k in values if k in fields):
            value = values[key]
            if not isinstance(value, str):
                continue
            merge_layer(
                target,
                {key: value},
                provenance=provenance,
                source=f"env:{label}:{key}",
                layer="env",
            )


def _validate_request_settings(settings: ChatglotConfig) -> None:
    errors: list[str] = []

    if not settings.CHATGLOT_ENDPOINT.startswith(("http://", "https://")):
        errors.append("CHATGLOT_ENDPOINT must be an http(s) URL.")
    if not settings.CHATGLOT_DEFAULT_LANGUAGE.strip():
        errors.append("CHATGLOT_DEFAULT_LANGUAGE must not be empty.")
    timeout = settings.CHATGLOT_REQUEST_TIMEOUT
    if timeout is not None and timeout <= 0:
        errors.append("CHATGLOT_REQUEST_TIMEOUT must be a positive number of seconds.")

    if errors:
        bullet_list = "\n".join(f"- {message}" for message in errors)
        raise TranslationProviderConfigurationError(
            "Configuration validation errors detected:\n" + bullet_list
        )


def _format_validation_errors(entries: Sequence[dict[str, Any]]) -> str:
    details: list[str] = []
    for entry in entries:
        path = entry.get("path") or []
        if isinstance(path, (list, tuple)):
            location = ".".join(str(part) for part in path if part not in {None, ""})
        else:
            location = str(path)
        message = str(entry.get("message") or entry.get("msg") or "Invalid value")
        source = entry.get("source")
        origin = f" (source: {source})" if source else ""
        prefix = f"{location}: " if location else ""
        details.append(f"- {prefix}{message}{origin}")
    return "Configuration validation errors detected:\n" + "\n".join(details)


def get_config(app_dir: Path | None = None) -> ConfigInstance:
    """Return the immutable configuration instance."""

    return _load_config_instance(app_dir=app_dir)


def get_settings(app_dir: Path | None = None) -> ChatglotConfig:
    """Return the validated schema model for typed access."""

    return get_config(app_dir=app_dir).model()
