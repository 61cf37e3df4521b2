"""Unit tests for the transformation driver, run without the goimports pass."""

from collections.abc import Callable
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from go_include import (
    GENERATED_HEADER,
    FormatError,
    Options,
    ParseError,
    ReadError,
    UnsupportedArgumentError,
    UnsupportedFunctionError,
    transform,
    transform_file,
)
from go_include.formatter import IdentityFormatter

NEGATED = b"//go:build !include\n// +build !include\n\n"


def test_source_without_placeholders_is_only_prefixed(identity_formatter: IdentityFormatter) -> None:
    source = b'package main\n\nimport "fmt"\n\nfunc main() {\n\tfmt.Println("hi")\n}\n'

    out = transform("main.go", source, formatter=identity_formatter)

    assert out == GENERATED_HEADER + NEGATED + source


def test_replaces_placeholders_and_toggles_build_tag(
    options: Options,
    identity_formatter: IdentityFormatter,
    write_file: Callable[[str, bytes], Path],
) -> None:
    write_file("greeting.txt", b"hello")
    source = b'//go:build include\n\npackage main\n\nvar greeting = include.String("greeting.txt")\n'

    out = transform("main.go", source, options, identity_formatter)

    assert out == GENERATED_HEADER + NEGATED + b"\n\npackage main\n\nvar greeting = `hello`\n"


def test_example_package(example_dir: Path, identity_formatter: IdentityFormatter) -> None:
    html = (example_dir / "index.html").read_bytes()
    options = Options(working_dir=str(example_dir))

    out = transform_file(str(example_dir / "main.go"), options, identity_formatter).decode()

    assert out.startswith(GENERATED_HEADER.decode() + "\n\n" + NEGATED.decode())
    assert "//go:build include" not in out
    assert "//go:generate" not in out
    assert "include.Bytes" not in out
    assert "include.String" not in out
    assert "html    = []byte{\n" in out
    assert "htmlStr = `" + html.decode() + "`" in out
    assert 'fmt.Printf("Listening on :8080...\\n")' in out


def test_custom_tag(
    tmp_path: Path, identity_formatter: IdentityFormatter, write_file: Callable[[str, bytes], Path]
) -> None:
    write_file("v.txt", b"1")
    source = b'//go:build embed\n\npackage main\n\nvar v = include.String("v.txt")\n'

    out = transform("main.go", source, Options(tag="embed", working_dir=str(tmp_path)), identity_formatter)

    assert out.startswith(GENERATED_HEADER + b"//go:build !embed\n// +build !embed\n\n")
    assert b"//go:build embed" not in out


def test_empty_options_fall_back_to_defaults(identity_formatter: IdentityFormatter) -> None:
    out = transform("main.go", b"package main\n", Options(tag="", namespace=""), identity_formatter)
    assert NEGATED in out


def test_formatter_receives_assembled_buffer() -> None:
    formatter = MagicMock()
    formatter.format.return_value = b"formatted"

    out = transform("pkg/main.go", b"package main\n", formatter=formatter)

    assert out == b"formatted"
    formatter.format.assert_called_once_with("pkg/main.go", GENERATED_HEADER + NEGATED + b"package main\n")


def test_formatter_failure_propagates() -> None:
    formatter = MagicMock()
    formatter.format.side_effect = FormatError("main.go", "bad")

    with pytest.raises(FormatError):
        transform("main.go", b"package main\n", formatter=formatter)


def test_parse_error_names_file(identity_formatter: IdentityFormatter) -> None:
    with pytest.raises(ParseError) as exc_info:
        transform("broken.go", b"package main\n\nvar = (\n", formatter=identity_formatter)

    assert exc_info.value.filename == "broken.go"
    assert "broken.go" in str(exc_info.value)


@pytest.mark.parametrize(
    ("declaration", "error"),
    [
        ('var x = include.Foo("x.txt")', UnsupportedFunctionError),
        ("var x = include.String(someVar)", UnsupportedArgumentError),
        ('var x = include.String("missing.txt")', ReadError),
    ],
    ids=["unsupported-function", "unsupported-argument", "missing-file"],
)
def test_errors_abort_without_formatting(options: Options, declaration: str, error: type[Exception]) -> None:
    formatter = MagicMock()

    with pytest.raises(error):
        transform("main.go", f"package main\n\n{declaration}\n".encode(), options, formatter)

    formatter.format.assert_not_called()


def test_transform_file_reports_unreadable_source(tmp_path: Path, identity_formatter: IdentityFormatter) -> None:
    missing = tmp_path / "nope.go"

    with pytest.raises(ReadError) as exc_info:
        transform_file(str(missing), formatter=identity_formatter)

    assert exc_info.value.path == str(missing)


def test_alternative_build_tags_stay_excluded_from_generated_file(identity_formatter: IdentityFormatter) -> None:
    out = transform("main.go", b"//go:build include || tools\n\npackage main\n", formatter=identity_formatter)

    assert out == (
        GENERATED_HEADER + b"//go:build !include && !tools\n// +build !include,!tools\n\n\n\npackage main\n"
    )
