"""@bodyParam tag parser.

Tag grammar: ``<name> <type> [required|optional] <description...>``, where
the description may end with ``Example: <value>``.
"""

import json
import logging
import math
import re
from typing import Any

from api_doc_generator.errors import MalformedParameterTag
from api_doc_generator.generator.sample import example_for

from .base import PARAM_TYPES, AnnotationBlock, ParameterDeclaration

logger = logging.getLogger(__name__)

PARAM_TAG = "bodyParam"

REQUIRED_MARKERS = {"required": True, "optional": False}

EXAMPLE_SUFFIX = re.compile(r"^(?P<description>.*?)\s*Example:\s*(?P<example>.+?)\s*$")

_BOOLEANS = {"true": True, "1": True, "yes": True, "false": False, "0": False, "no": False}


def parse_parameters(block: AnnotationBlock) -> dict[str, ParameterDeclaration]:
    """Parse every @bodyParam in a method-level block.

    Malformed tags are logged and skipped; the rest still parse.
    """
    params: dict[str, ParameterDeclaration] = {}
    for body in block.all(PARAM_TAG):
        try:
            param = parse_parameter(body)
        except MalformedParameterTag as e:
            logger.warning(f"Skipping @{PARAM_TAG} {body!r}: {e}")
            continue

        if param.name in params:
            logger.warning(f"Duplicate @{PARAM_TAG} {param.name!r}, keeping the last one")
        params[param.name] = param
    return params


def parse_parameter(body: str) -> ParameterDeclaration:
    """Parse a single @bodyParam body into a ParameterDeclaration."""
    tokens = body.split(None, 2)
    if not tokens:
        raise MalformedParameterTag("missing parameter name")

    name = tokens[0]
    if len(tokens) < 2:
        raise MalformedParameterTag(f"missing type for parameter {name!r}")

    param_type = tokens[1].lower()
    if param_type not in PARAM_TYPES:
        raise MalformedParameterTag(f"unknown type {tokens[1]!r} for parameter {name!r}")

    rest = tokens[2] if len(tokens) == 3 else ""
    required = False
    head = rest.split(None, 1)
    if head and head[0] in REQUIRED_MARKERS:
        required = REQUIRED_MARKERS[head[0]]
        rest = head[1] if len(head) == 2 else ""

    description, raw_example = _split_example(rest)
    if raw_example is None:
        example = example_for(param_type, name)
    else:
        example = coerce_example(param_type, raw_example)

    return ParameterDeclaration(
        name=name,
        type=param_type,
        required=required,
        description=description,
        example=example,
    )


def coerce_example(param_type: str, raw: str) -> Any:
    """Convert a textual example into a value of ``param_type``."""
    try:
        if param_type == "integer":
            return int(raw)
        if param_type == "number":
            value = float(raw)
            if not math.isfinite(value):
                raise ValueError(raw)
            return value
        if param_type == "boolean":
            return _BOOLEANS[raw.lower()]
        if param_type == "string":
            return raw
        value = json.loads(raw, parse_constant=_reject_constant)
    except (ValueError, KeyError):
        raise MalformedParameterTag(f"example {raw!r} is not a valid {param_type}") from None

    expected = dict if param_type == "object" else list
    if not isinstance(value, expected):
        raise MalformedParameterTag(f"example {raw!r} is not a valid {param_type}")
    return value


def _split_example(text: str) -> tuple[str, str | None]:
    match = EXAMPLE_SUFFIX.match(text)
    if match is None:
        return text, None
    return match.group("description"), match.group("example")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")
