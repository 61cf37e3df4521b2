from enum import Enum

from pydantic import BaseModel, ConfigDict, model_validator
from tree_sitter import Tree

DEFAULT_BUILD_TAG = "include"
DEFAULT_NAMESPACE = "include"


class Options(BaseModel):
    model_config = ConfigDict(frozen=True)

    tag: str = DEFAULT_BUILD_TAG
    working_dir: str | None = None
    namespace: str = DEFAULT_NAMESPACE

    def with_defaults(self) -> "Options":
        """Return a copy with empty values replaced by the defaults."""
        return Options(
            tag=self.tag or DEFAULT_BUILD_TAG,
            working_dir=self.working_dir or None,
            namespace=self.namespace or DEFAULT_NAMESPACE,
        )


class TextSpan(BaseModel):
    """Half-open ``[start, end)`` byte range into the original source."""

    model_config = ConfigDict(frozen=True)

    start: int
    end: int

    @model_validator(mode="after")
    def _check_bounds(self) -> "TextSpan":
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"invalid span [{self.start}, {self.end})")
        return self

    def __len__(self) -> int:
        return self.end - self.start


class PlaceholderCall(BaseModel):
    model_config = ConfigDict(frozen=True)

    selector: str
    filename: str
    span: TextSpan


class DirectiveKind(str, Enum):
    BUILD = "build"
    PLUS_BUILD = "plus_build"
    GENERATE = "generate"


class CompilerDirective(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: DirectiveKind
    text: str
    span: TextSpan


class Splice(BaseModel):
    """Replace ``span`` of the original source with ``replacement``."""

    model_config = ConfigDict(frozen=True)

    span: TextSpan
    replacement: bytes = b""


class SourceDocument(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    filename: str
    source: bytes
    tree: Tree
