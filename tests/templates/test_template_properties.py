# topmark:header:start
#
#   project      : Typstry
#   file         : test_template_properties.py
#   file_relpath : tests/templates/test_template_properties.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Property tests for the template escaping grammar."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from tests.strategies_typstry import s_plain_text
from typstry.templates.template import Template

pytestmark = pytest.mark.hypothesis_slow


@given(text=s_plain_text)
def test_text_without_backslashes_is_unchanged(text: str) -> None:
    assert Template(text).render() == text


@given(before=s_plain_text, after=s_plain_text, run=st.integers(min_value=0, max_value=8))
def test_backslash_run_before_marker(before: str, after: str, run: int) -> None:
    source = before + "\\" * run + "\\(x)" + after
    expected_middle = "\\" * (run // 2) + ("\\(x)" if run % 2 else "7")
    assert Template(source).substitute(x=7) == before + expected_middle + after
