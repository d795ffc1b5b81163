# pagebuilder/domain/section_config.py
from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

from .exceptions import ConfigurationError

# Keys that describe the section (or the template) rather than a field
DYNAMIC_FLAG = "is_dynamic"
DEFAULT_FIELD_TYPE = "text"


@dataclass(frozen=True)
class FieldConfig:
    """One editable field of a section: its type, optional label and extra options."""
    type: str = DEFAULT_FIELD_TYPE
    label: Optional[str] = None
    options: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = dict(self.options)
        data["type"] = self.type
        if self.label is not None:
            data["label"] = self.label
        return data


@dataclass(frozen=True)
class SectionConfig:
    key: str
    fields: Dict[str, FieldConfig]
    is_dynamic: bool
    order: int

    def fields_dict(self) -> Dict[str, Dict[str, Any]]:
        return {name: config.to_dict() for name, config in self.fields.items()}

    def empty_data(self) -> Dict[str, str]:
        """Placeholder values for every field, used to seed new page sections."""
        return {name: "" for name in self.fields}


def load_descriptor(path: Path, *, template: str) -> Dict[Any, Any]:
    """
    Read a template's section descriptor.

    YAML is parsed with safe_load, so JSON descriptors load too.
    An empty file is an empty descriptor.
    """
    try:
        with open(path, encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Descriptor {path.name} is not valid YAML: {exc}", template=template) from exc
    except OSError as exc:
        raise ConfigurationError(f"Descriptor {path.name} cannot be read: {exc}", template=template) from exc

    if raw is None:
        return {}

    if not isinstance(raw, dict):
        raise ConfigurationError(
            f"Descriptor {path.name} must be a mapping of section keys, got {type(raw).__name__}",
            template=template,
        )

    return raw


def parse_fields(template: str, key: str, schema: Mapping[Any, Any]) -> Dict[str, FieldConfig]:
    fields: Dict[str, FieldConfig] = {}

    for name, config in schema.items():
        if not isinstance(name, str) or not name.strip():
            raise ConfigurationError(
                f"Section '{key}' has an invalid field name: {name!r}", template=template, key=key
            )

        if config is None:
            fields[name] = FieldConfig()
        elif isinstance(config, str):
            fields[name] = FieldConfig(type=config)
        elif isinstance(config, dict):
            options = dict(config)
            field_type = options.pop("type", DEFAULT_FIELD_TYPE)
            label = options.pop("label", None)

            if not isinstance(field_type, str) or not field_type:
                raise ConfigurationError(
                    f"Field '{name}' of section '{key}' has an invalid type: {field_type!r}",
                    template=template,
                    key=key,
                )
            if label is not None and not isinstance(label, str):
                raise ConfigurationError(
                    f"Field '{name}' of section '{key}' has a non-string label",
                    template=template,
                    key=key,
                )

            for option, value in options.items():
                try:
                    json.dumps({option: value})
                except (TypeError, ValueError) as exc:
                    raise ConfigurationError(
                        f"Option '{option}' of field '{name}' in section '{key}' is not JSON-serializable: {exc}",
                        template=template,
                        key=key,
                    ) from exc

            fields[name] = FieldConfig(type=field_type, label=label, options=options)
        else:
            raise ConfigurationError(
                f"Field '{name}' of section '{key}' must be a mapping, a type name or empty",
                template=template,
                key=key,
            )

    return fields


def parse_sections(
    template: str,
    descriptor: Mapping[Any, Any],
    *,
    template_is_dynamic: bool,
) -> List[SectionConfig]:
    """
    Turn a descriptor into ordered section configs.

    Rules:
    - Empty descriptor -> no sections
    - Top-level `is_dynamic` is template metadata, not a section
    - Every section key must be a non-empty string; one bad key rejects the
      whole descriptor
    - Sections of a dynamic template are always dynamic; otherwise the
      section's own `is_dynamic` flag decides and is stripped from its fields
    """
    if not descriptor:
        return []

    sections: List[SectionConfig] = []
    order = 0

    for key, schema in descriptor.items():
        if key == DYNAMIC_FLAG:
            continue

        if not isinstance(key, str) or not key.strip():
            raise ConfigurationError(
                f"Section key {key!r} is not a usable name; section keys must be non-empty strings",
                template=template,
                key=key,
            )

        if schema is None:
            schema = {}
        if not isinstance(schema, dict):
            raise ConfigurationError(
                f"Section '{key}' must map field names to field settings",
                template=template,
                key=key,
            )

        schema = dict(schema)
        flag = schema.pop(DYNAMIC_FLAG, False)
        if not isinstance(flag, bool):
            raise ConfigurationError(
                f"Section '{key}' has a non-boolean is_dynamic: {flag!r}",
                template=template,
                key=key,
            )

        sections.append(
            SectionConfig(
                key=key,
                fields=parse_fields(template, key, schema),
                is_dynamic=True if template_is_dynamic else flag,
                order=order,
            )
        )
        order += 1

    return sections
