"""Tests for RendererOptions, option coercion and the caption counter."""

import dataclasses
import math
import threading

import pytest

from pseudocode.config import (
    GLOBAL_CAPTION_COUNTER,
    CaptionCounter,
    RendererOptions,
    coerce_options,
    parse_indent_size,
)
from pseudocode.errors import ConfigError


class TestDefaults:
    def test_default_values(self) -> None:
        options = RendererOptions()
        assert options.indent_size == 1.2
        assert options.comment_delimiter == " // "
        assert options.line_number is False
        assert options.line_number_punc == ":"
        assert options.no_end is False
        assert options.caption_count is None
        assert options.title_prefix == "Algorithm"
        assert options.caption_counter is None
        assert options.math_backend is None

    def test_frozen(self) -> None:
        options = RendererOptions()
        with pytest.raises(dataclasses.FrozenInstanceError):
            options.no_end = True  # type: ignore[misc]

    def test_counter_defaults_to_global(self) -> None:
        assert RendererOptions().counter is GLOBAL_CAPTION_COUNTER

    def test_injected_counter(self) -> None:
        counter = CaptionCounter()
        assert RendererOptions(caption_counter=counter).counter is counter


class TestIndentSize:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (1.2, 1.2),
            (2, 2.0),
            (0, 0.0),
            ("1.2em", 1.2),
            ("2em", 2.0),
            (" 0.5em ", 0.5),
        ],
    )
    def test_accepted(self, value: object, expected: float) -> None:
        assert parse_indent_size(value) == expected
        assert RendererOptions(indent_size=value).indent_size == expected  # type: ignore[arg-type]

    @pytest.mark.parametrize("value", ["12px", "1.2", "1.2rem", "", "em"])
    def test_wrong_unit_or_number(self, value: str) -> None:
        with pytest.raises(ConfigError, match="indent_size") as exc_info:
            parse_indent_size(value)
        assert exc_info.value.option == "indent_size"

    @pytest.mark.parametrize("value", [-1, -0.5, "-1em", math.inf, math.nan, "nanem"])
    def test_negative_or_non_finite(self, value: object) -> None:
        with pytest.raises(ConfigError, match="non-negative finite"):
            parse_indent_size(value)

    @pytest.mark.parametrize("value", [True, None, [1.2], {"em": 1}])
    def test_wrong_type(self, value: object) -> None:
        with pytest.raises(ConfigError, match="expected a length in em"):
            parse_indent_size(value)


class TestValidation:
    @pytest.mark.parametrize("value", ["3", 1.5, True])
    def test_caption_count_must_be_int(self, value: object) -> None:
        with pytest.raises(ConfigError, match="Option 'caption_count'"):
            RendererOptions(caption_count=value)  # type: ignore[arg-type]

    @pytest.mark.parametrize("name", ["comment_delimiter", "line_number_punc", "title_prefix"])
    def test_text_options_must_be_strings(self, name: str) -> None:
        with pytest.raises(ConfigError, match=f"Option '{name}'"):
            RendererOptions(**{name: 3})  # type: ignore[arg-type]

    @pytest.mark.parametrize("name", ["line_number", "no_end"])
    @pytest.mark.parametrize("value", ["false", 0, 1, None])
    def test_flags_must_be_booleans(self, name: str, value: object) -> None:
        with pytest.raises(ConfigError, match=f"Option '{name}': expected a boolean"):
            RendererOptions(**{name: value})  # type: ignore[arg-type]


class TestFromDict:
    def test_camel_case_keys(self) -> None:
        options = RendererOptions.from_dict(
            {
                "indentSize": "2em",
                "commentDelimiter": "#",
                "lineNumber": True,
                "lineNumberPunc": ".",
                "noEnd": True,
                "captionCount": 3,
                "titlePrefix": "Procedure",
            }
        )
        assert options == RendererOptions(
            indent_size=2.0,
            comment_delimiter="#",
            line_number=True,
            line_number_punc=".",
            no_end=True,
            caption_count=3,
            title_prefix="Procedure",
        )

    def test_snake_case_keys(self) -> None:
        assert RendererOptions.from_dict({"no_end": True}).no_end is True

    def test_unknown_keys_ignored(self) -> None:
        assert RendererOptions.from_dict({"scopeLines": True}) == RendererOptions()

    def test_values_still_validated(self) -> None:
        with pytest.raises(ConfigError):
            RendererOptions.from_dict({"indentSize": "1px"})

    def test_string_flag_rejected(self) -> None:
        with pytest.raises(ConfigError, match="Option 'no_end'"):
            RendererOptions.from_dict({"noEnd": "false"})


class TestMerged:
    def test_empty_overrides_return_self(self) -> None:
        options = RendererOptions()
        assert options.merged({}) is options

    def test_overrides_applied(self) -> None:
        merged = RendererOptions(no_end=True).merged({"lineNumber": True})
        assert merged.no_end is True
        assert merged.line_number is True

    def test_unknown_override(self) -> None:
        with pytest.raises(ConfigError, match="Option 'colour': unknown option"):
            RendererOptions().merged({"colour": "red"})


class TestCoerceOptions:
    def test_none(self) -> None:
        assert coerce_options(None) == RendererOptions()

    def test_instance_passes_through(self) -> None:
        options = RendererOptions(no_end=True)
        assert coerce_options(options) is options

    def test_dict(self) -> None:
        assert coerce_options({"noEnd": True}).no_end is True

    def test_overrides(self) -> None:
        assert coerce_options({"noEnd": True}, {"no_end": False}).no_end is False

    @pytest.mark.parametrize("value", ["line_number", 3, ["no_end"]])
    def test_unsupported_type(self, value: object) -> None:
        with pytest.raises(ConfigError, match="Option 'options'"):
            coerce_options(value)  # type: ignore[arg-type]


class TestCaptionCounter:
    def test_increments_before_use(self) -> None:
        counter = CaptionCounter()
        assert counter.value == 0
        assert counter.next() == 1
        assert counter.next() == 2
        assert counter.value == 2

    def test_reset(self) -> None:
        counter = CaptionCounter(7)
        counter.reset(3)
        assert counter.next() == 4
        counter.reset()
        assert counter.value == 0

    def test_thread_safe(self) -> None:
        counter = CaptionCounter()
        seen: list[int] = []
        lock = threading.Lock()

        def work() -> None:
            for _ in range(200):
                number = counter.next()
                with lock:
                    seen.append(number)

        threads = [threading.Thread(target=work) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert sorted(seen) == list(range(1, 801))
