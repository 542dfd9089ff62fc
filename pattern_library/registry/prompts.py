"""
Prompt Table

Prompts are rendered by pure functions. Data-defined prompts use a
PromptTemplate: `{argument}` placeholders filled from provided values, with
a literal default for every absent argument. A description or message may
override an argument's default for its own text. Rendering never fails and the
`required` flag is not enforced.
"""

import logging
from dataclasses import dataclass, field
from string import Formatter
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from jsonschema import ValidationError, validate

from pattern_library.mcp_types import (
    PromptArgument,
    PromptArguments,
    PromptDescriptor,
    PromptMessage,
    PromptRenderResult,
    TextContent,
)
from pattern_library.registry.errors import ManifestError, PromptNotFoundError

logger = logging.getLogger(__name__)


PROMPTS_SCHEMA: Dict[str, Any] = {
    "type": "array",
    "items": {
        "type": "object",
        "properties": {
            "name": {"type": "string", "minLength": 1},
            "description": {"type": "string"},
            "arguments": {
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": {
                        "name": {"type": "string", "minLength": 1},
                        "description": {"type": "string"},
                        "required": {"type": "boolean"},
                        "default": {"type": "string"},
                    },
                    "required": ["name"],
                },
            },
            "template": {
                "type": "object",
                "properties": {
                    "description": {"type": "string"},
                    "descriptionDefaults": {"$ref": "#/definitions/defaults"},
                    "messages": {
                        "type": "array",
                        "items": {
                            "type": "object",
                            "properties": {
                                "role": {"enum": ["user", "assistant"]},
                                "text": {"type": "string"},
                                "defaults": {"$ref": "#/definitions/defaults"},
                            },
                            "required": ["role", "text"],
                        },
                    },
                },
                "required": ["description", "messages"],
            },
        },
        "required": ["name", "template"],
    },
    "definitions": {
        "defaults": {"type": "object", "additionalProperties": {"type": "string"}},
    },
}


def default_placeholder(argument_name: str) -> str:
    """Fallback text for an argument declared without a default."""
    return argument_name.replace("_", " ")


class _Substitutions(dict):
    """Argument values that fall back to the declared default on a miss."""

    def __init__(self, values: Mapping[str, str], defaults: Mapping[str, str]):
        super().__init__(values)
        self._defaults = defaults

    def __missing__(self, key: str) -> str:
        return self._defaults.get(key, default_placeholder(key))


def _placeholders(text: str) -> List[str]:
    return [name for _, name, _, _ in Formatter().parse(text) if name is not None]


@dataclass(frozen=True)
class PromptTemplate:
    """
    Immutable prompt template.

    Args:
        description: Template for the render result's description
        messages: (role, text) templates, in order
        defaults: Literal text substituted for each absent argument
        arguments: Declared argument names; placeholders must be among them
        description_defaults: Overrides of `defaults` for the description only
        message_defaults: Overrides of `defaults` per message, by position
    """
    description: str
    messages: Tuple[Tuple[str, str], ...]
    defaults: Mapping[str, str] = field(default_factory=dict)
    arguments: Tuple[str, ...] = ()
    description_defaults: Mapping[str, str] = field(default_factory=dict)
    message_defaults: Tuple[Mapping[str, str], ...] = ()

    def __post_init__(self):
        declared = set(self.arguments)
        texts = [self.description] + [text for _, text in self.messages]
        for text in texts:
            try:
                names = _placeholders(text)
            except ValueError as e:
                raise ManifestError(f"Malformed prompt template: {e}") from e
            unknown = [n for n in names if n not in declared]
            if unknown:
                raise ManifestError(f"Template references undeclared arguments: {', '.join(unknown)}")

        if len(self.message_defaults) > len(self.messages):
            raise ManifestError("More message defaults than messages")
        for overrides in (self.defaults, self.description_defaults) + tuple(self.message_defaults):
            unknown = [n for n in overrides if n not in declared]
            if unknown:
                raise ManifestError(f"Defaults given for undeclared arguments: {', '.join(unknown)}")

    def values(self, provided: Optional[PromptArguments]) -> Dict[str, str]:
        """Provided values for declared arguments; None and "" count as absent."""
        values = {}
        for name in self.arguments:
            value = (provided or {}).get(name)
            if value:
                values[name] = str(value)
        return values

    def _fill(self, text: str, values: Mapping[str, str], overrides: Mapping[str, str]) -> str:
        return text.format_map(_Substitutions(values, {**self.defaults, **overrides}))

    def render(self, provided: Optional[PromptArguments] = None) -> PromptRenderResult:
        values = self.values(provided)
        message_defaults = tuple(self.message_defaults) + ({},) * (len(self.messages) - len(self.message_defaults))
        return PromptRenderResult(
            description=self._fill(self.description, values, self.description_defaults),
            messages=tuple(
                PromptMessage(role=role, content=TextContent(type="text", text=self._fill(text, values, overrides)))
                for (role, text), overrides in zip(self.messages, message_defaults)
            ),
        )


def parse_prompts(entries: Any) -> List[PromptDescriptor]:
    """
    Validate raw prompt data and build template-backed descriptors.

    Raises:
        ManifestError: If the data does not match PROMPTS_SCHEMA or a
            template references an undeclared argument
    """
    try:
        validate(instance=entries, schema=PROMPTS_SCHEMA)
    except ValidationError as e:
        path = "/".join(str(p) for p in e.path)
        raise ManifestError(f"Invalid prompts at '{path}': {e.message}") from e

    descriptors = []
    for entry in entries:
        raw_args = entry.get("arguments", [])
        arguments = tuple(
            PromptArgument(
                name=a["name"],
                description=a.get("description", ""),
                required=a.get("required", False),
            )
            for a in raw_args
        )
        raw_template = entry["template"]
        template = PromptTemplate(
            description=raw_template["description"],
            messages=tuple((m["role"], m["text"]) for m in raw_template["messages"]),
            defaults={a["name"]: a["default"] for a in raw_args if "default" in a},
            arguments=tuple(a.name for a in arguments),
            description_defaults=raw_template.get("descriptionDefaults", {}),
            message_defaults=tuple(m.get("defaults", {}) for m in raw_template["messages"]),
        )
        descriptors.append(PromptDescriptor(
            name=entry["name"],
            description=entry.get("description", ""),
            render=template.render,
            arguments=arguments,
        ))
    return descriptors


class PromptTable:
    """Read-only prompt lookup keyed by name, in declaration order."""

    def __init__(self, descriptors: Iterable[PromptDescriptor] = ()):
        self._prompts: Dict[str, PromptDescriptor] = {}
        for descriptor in descriptors:
            if descriptor.name in self._prompts:
                raise ManifestError(f"Duplicate prompt name: {descriptor.name}")
            self._prompts[descriptor.name] = descriptor

    def __len__(self) -> int:
        return len(self._prompts)

    def list_all(self) -> List[PromptDescriptor]:
        return list(self._prompts.values())

    def get(self, name: str) -> PromptDescriptor:
        try:
            return self._prompts[name]
        except KeyError:
            raise PromptNotFoundError(name) from None

    def render(self, name: str, provided: Optional[PromptArguments] = None) -> PromptRenderResult:
        descriptor = self.get(name)
        declared = {a.name for a in descriptor.arguments}
        ignored = sorted(set(provided or {}) - declared)
        if ignored:
            logger.debug(f"Ignoring undeclared arguments for prompt {name}: {ignored}")
        return descriptor.render(dict(provided or {}))
