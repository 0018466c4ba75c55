"""Loading and validation of the optional YAML configuration file."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any

import yaml
from jsonschema import ValidationError, validators

from razerctl.core.errors import ConfigLoadError, ConfigValidationError
from razerctl.core.model import RAZER_VENDOR_ID, DeviceSignature

LOGGER = logging.getLogger(__name__)


class UniqueKeyLoader(yaml.SafeLoader):
    """YAML loader that rejects duplicate mapping keys and keeps hex ids as text."""


UniqueKeyLoader.yaml_implicit_resolvers = {
    first_char: [(tag, regexp) for tag, regexp in mappings if tag != "tag:yaml.org,2002:int"]
    for first_char, mappings in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def _construct_mapping(loader: UniqueKeyLoader, node: yaml.Node, deep: bool = False) -> dict[str, Any]:
    mapping: dict[str, Any] = {}
    for key_node, value_node in node.value:
        key = loader.construct_object(key_node, deep=deep)
        if key in mapping:
            raise ConfigValidationError(f"Duplicate key '{key}' in YAML document")
        mapping[key] = loader.construct_object(value_node, deep=deep)
    return mapping


UniqueKeyLoader.add_constructor(
    yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG,
    _construct_mapping,
)


@dataclass(frozen=True)
class LoadedConfig:
    signature: DeviceSignature
    source: Path | None
    warnings: tuple[str, ...]


def _load_schema_validator() -> Any:
    schema_text = resources.files("razerctl.schemas").joinpath("config.schema.json").read_text(
        encoding="utf-8"
    )
    schema = json.loads(schema_text)
    validator_cls = validators.validator_for(schema)
    validator_cls.check_schema(schema)
    return validator_cls(schema)


def default_config_path() -> Path:
    xdg_config = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return xdg_config / "razerctl/config.yaml"


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigLoadError(f"Could not read config file {path}: {exc}") from exc

    try:
        loaded = yaml.load(content, Loader=UniqueKeyLoader)
    except yaml.YAMLError as exc:
        raise ConfigValidationError(f"Invalid YAML in {path}: {exc}") from exc

    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigValidationError(f"Config file {path} must contain a mapping at root")
    return loaded


def _build_signature(doc: dict[str, Any], source: Path) -> DeviceSignature:
    validator = _load_schema_validator()
    try:
        validator.validate(doc)
    except ValidationError as exc:
        path = ".".join(str(p) for p in exc.path)
        where = f" ({path})" if path else ""
        raise ConfigValidationError(f"Schema validation failed for {source}{where}: {exc.message}") from exc

    defaults = DeviceSignature()
    return DeviceSignature(
        vendor_id=int(doc["vendor_id"], 16) if "vendor_id" in doc else defaults.vendor_id,
        subsystem=doc.get("subsystem", defaults.subsystem),
        id_property=doc.get("id_property", defaults.id_property),
    )


def load_config(path: Path | None = None) -> LoadedConfig:
    """Load the config file, falling back to built-in defaults.

    An explicit ``path`` must exist; the default location is optional.
    """
    explicit = path is not None
    source = path if explicit else default_config_path()
    if not explicit and not source.is_file():
        return LoadedConfig(signature=DeviceSignature(), source=None, warnings=())

    signature = _build_signature(_read_yaml(source), source)
    warnings: list[str] = []
    if signature.vendor_id != RAZER_VENDOR_ID:
        warning = f"Config {source} overrides vendor id with {signature.vendor_id:04x}"
        LOGGER.warning(warning)
        warnings.append(warning)
    return LoadedConfig(signature=signature, source=source, warnings=tuple(warnings))
