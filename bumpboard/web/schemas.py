"""
BumpBoard Request Schemas

Validated inputs for the posting endpoints. Malformed bodies are rejected
with a VALIDATION error before they reach a board.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..core.errors import BoardError, validation

MAX_TITLE_LENGTH = 256
MAX_TEXT_LENGTH = 65536


def _check_text(
    value: Any,
    max_length: int,
    bad: str,
    too_long: str
) -> Optional[BoardError]:
    if not isinstance(value, str) or not value.strip():
        return validation(bad)
    if len(value) > max_length:
        return validation(too_long)
    return None


def parse_id(value: Any) -> Optional[int]:
    """Read a thread id from JSON, form or path input; None if it is not one."""
    # bool is an int subclass but never a valid id
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


@dataclass(frozen=True)
class CreateThreadInput:
    """Body of a thread creation request: {title, text}."""
    title: str
    text: str

    @classmethod
    def parse(
        cls,
        data: Any,
        max_title_length: int = MAX_TITLE_LENGTH,
        max_text_length: int = MAX_TEXT_LENGTH
    ) -> tuple[Optional["CreateThreadInput"], Optional[BoardError]]:
        """
        Validate a JSON object or form mapping.

        Returns:
            (CreateThreadInput, None) on success
            (None, BoardError) on failure
        """
        if not isinstance(data, Mapping):
            return None, validation("Bad request body")

        title = data.get("title")
        error = _check_text(title, max_title_length, "Bad title", "Title too long")
        if error:
            return None, error

        text = data.get("text")
        error = _check_text(text, max_text_length, "Bad text", "Text too long")
        if error:
            return None, error

        return cls(title=title, text=text), None


@dataclass(frozen=True)
class ReplyInput:
    """Body of a reply request: {id, text}."""
    id: int
    text: str

    @classmethod
    def parse(
        cls,
        data: Any,
        max_text_length: int = MAX_TEXT_LENGTH,
        allow_string_id: bool = False
    ) -> tuple[Optional["ReplyInput"], Optional[BoardError]]:
        """
        Validate a JSON object or form mapping.

        JSON bodies must carry a numeric id; form posts send it as a
        string, which is accepted when allow_string_id is set.
        """
        if not isinstance(data, Mapping):
            return None, validation("Bad request body")

        raw_id = data.get("id")
        if isinstance(raw_id, str) and not allow_string_id:
            return None, validation("Bad id")
        thread_id = parse_id(raw_id)
        if thread_id is None:
            return None, validation("Bad id")

        text = data.get("text")
        error = _check_text(text, max_text_length, "Bad text", "Text too long")
        if error:
            return None, error

        return cls(id=thread_id, text=text), None
