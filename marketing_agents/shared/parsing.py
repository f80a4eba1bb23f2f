"""
Tolerant structured-output parser.

Provider responses are supposed to be JSON but frequently arrive wrapped
in markdown fences, surrounded by prose, or with raw control characters
inside string values. Parsing proceeds through increasingly lenient
strategies:

1. Direct ``json.loads`` of the stripped response
2. Extraction of the first balanced ``{...}`` block (after removing
   markdown code fences)
3. The same block after sanitizing: raw newlines/tabs inside quoted
   strings are escaped, other control bytes dropped, and trailing commas
   before a closing bracket removed

If every strategy fails the tolerant entry point returns ``None``.
"""

import json
import logging
import re
from typing import Any, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError


logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

_CODE_BLOCK_PATTERN = re.compile(r"```(?:json|JSON)?\s*([\s\S]*?)```")
_TRAILING_COMMA_PATTERN = re.compile(r",(\s*[}\]])")

_ESCAPES = {"\n": "\\n", "\r": "\\r", "\t": "\\t"}

_UNPARSED = object()


class ParseError(Exception):
    """Raised when no parsing strategy yields valid JSON."""

    pass


def _strip_code_fences(text: str) -> str:
    match = _CODE_BLOCK_PATTERN.search(text)
    if match:
        return match.group(1).strip()
    return text


def extract_json_block(raw_response: str) -> Optional[str]:
    """
    Extract the first balanced JSON object from an LLM response.

    Handles markdown code blocks and leading/trailing prose. Braces inside
    quoted strings are ignored when matching. An array is returned instead
    when the (unfenced) payload itself starts with ``[``.

    Args:
        raw_response: Raw LLM response string

    Returns:
        The balanced block, or None if no opening brace is found
    """
    content = _strip_code_fences(raw_response.strip())

    if content.startswith("["):
        opener, closer = "[", "]"
    else:
        opener, closer = "{", "}"

    start = content.find(opener)
    if start == -1:
        return None

    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(content)):
        char = content[i]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char == opener:
            depth += 1
        elif char == closer:
            depth -= 1
            if depth == 0:
                return content[start : i + 1]

    # Unbalanced - hand back the tail and let the sanitizer/parser decide
    return content[start:]


def sanitize_json_text(text: str) -> str:
    """
    Repair common LLM JSON defects.

    Inside quoted strings raw newline, carriage return and tab characters
    are escaped and any other control byte is dropped. Outside strings,
    trailing commas before ``}`` or ``]`` are removed.

    Args:
        text: Candidate JSON text

    Returns:
        Sanitized JSON text
    """
    out = []
    in_string = False
    escaped = False
    for char in text:
        if in_string:
            if escaped:
                escaped = False
                out.append(char)
                continue
            if char == "\\":
                escaped = True
                out.append(char)
            elif char == '"':
                in_string = False
                out.append(char)
            elif char in _ESCAPES:
                out.append(_ESCAPES[char])
            elif ord(char) < 0x20 or 0x7F <= ord(char) <= 0x9F:
                continue
            else:
                out.append(char)
        else:
            if char == '"':
                in_string = True
            out.append(char)

    return _strip_trailing_commas("".join(out))


def _strip_trailing_commas(text: str) -> str:
    # Only touch commas outside of string literals
    parts = re.split(r'("(?:\\.|[^"\\])*")', text)
    for idx in range(0, len(parts), 2):
        parts[idx] = _TRAILING_COMMA_PATTERN.sub(r"\1", parts[idx])
    return "".join(parts)


def _try_loads(text: str) -> Any:
    try:
        return json.loads(text)
    except (json.JSONDecodeError, TypeError, ValueError):
        return _UNPARSED


def parse_json_strict(raw_response: str) -> Any:
    """
    Parse an LLM response as JSON, trying every strategy in turn.

    Args:
        raw_response: Raw LLM response string

    Returns:
        The decoded JSON value

    Raises:
        ParseError: If every strategy fails
    """
    if raw_response is None:
        raise ParseError("Response is empty")

    text = raw_response.strip()
    if not text:
        raise ParseError("Response is empty")

    data = _try_loads(text)
    if data is not _UNPARSED:
        return data

    block = extract_json_block(text)
    if block is None:
        raise ParseError(f"No JSON structure found in response: {text[:200]}")

    data = _try_loads(block)
    if data is not _UNPARSED:
        return data

    data = _try_loads(sanitize_json_text(block))
    if data is not _UNPARSED:
        logger.debug("Parsed response after sanitize pass")
        return data

    raise ParseError(f"Failed to parse JSON after sanitize pass: {block[:200]}")


def parse_json_tolerant(raw_response: Optional[str]) -> Optional[Any]:
    """
    Best-effort JSON parse; returns None instead of raising.

    Args:
        raw_response: Raw LLM response string

    Returns:
        Decoded JSON value or None
    """
    try:
        return parse_json_strict(raw_response)
    except ParseError as e:
        logger.debug(f"Tolerant parse gave up: {e}")
        return None


def parse_model(raw_response: Optional[str], model_cls: Type[ModelT]) -> Optional[ModelT]:
    """
    Parse a response and validate it against a pydantic model.

    Args:
        raw_response: Raw LLM response string
        model_cls: Pydantic model to validate against

    Returns:
        Validated model instance, or None if parsing or validation fails
    """
    data = parse_json_tolerant(raw_response)
    if data is None:
        return None
    try:
        return model_cls.model_validate(data)
    except ValidationError as e:
        logger.debug(f"{model_cls.__name__} validation failed: {e}")
        return None
