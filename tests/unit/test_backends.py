"""Test handing presentations to output collaborators."""

import pytest

from md2deck import ValidationFailed
from md2deck.backends import ValidationIssue, ValidationResult, generate_output
from md2deck.config import ConverterOptions
from md2deck.models import Presentation, TitleSlide


class FakeRenderer:
    def __init__(self):
        self.rendered = []

    def render(self, presentation):
        self.rendered.append(presentation)
        return b"deck"


class FakeTemplateProcessor:
    def apply_template(self, presentation, template_bytes):
        return template_bytes + b"+filled"


class FakeValidator:
    def __init__(self, issues=None):
        self.issues = issues or []

    def validate(self, presentation):
        return ValidationResult(valid=not self.issues, errors=self.issues)


@pytest.fixture
def presentation():
    return Presentation(title="Deck", slides=[TitleSlide(title="Deck")])


def test_renderer_is_used(presentation):
    renderer = FakeRenderer()

    assert generate_output(presentation, renderer=renderer, validator=FakeValidator()) == b"deck"
    assert renderer.rendered == [presentation]


def test_template_takes_precedence(presentation):
    output = generate_output(
        presentation,
        renderer=FakeRenderer(),
        template_processor=FakeTemplateProcessor(),
        template_bytes=b"template",
    )

    assert output == b"template+filled"


def test_validation_failure_stops_rendering(presentation):
    renderer = FakeRenderer()
    validator = FakeValidator([ValidationIssue(field="slides[0].title", message="too long")])

    with pytest.raises(ValidationFailed) as excinfo:
        generate_output(presentation, renderer=renderer, validator=validator)

    assert "slides[0].title: too long" in str(excinfo.value)
    assert excinfo.value.issues[0].message == "too long"
    assert renderer.rendered == []


def test_missing_collaborators(presentation):
    with pytest.raises(ValueError):
        generate_output(presentation)

    with pytest.raises(ValueError):
        generate_output(presentation, renderer=FakeRenderer(), template_bytes=b"t")


@pytest.mark.parametrize("kwargs", [{"slides_per_page": 0}, {"max_chars_per_slide": 0}])
def test_invalid_options(kwargs):
    with pytest.raises(ValueError):
        ConverterOptions(**kwargs)
