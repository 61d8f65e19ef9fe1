"""Tests for unitctl.utils.service_file: unit-file rendering.

Validates name normalisation, required-field validation, and the exact
layout of the rendered ``.service`` text.
"""

import io

import pytest

from unitctl.exceptions import ValidationError
from unitctl.models.service import ServiceDefinition
from unitctl.utils.service_file import normalize_name, render, render_string, validate


class TestNormalizeName:

    def test_appends_suffix(self):
        assert normalize_name("foo") == "foo.service"

    def test_idempotent(self):
        assert normalize_name("foo.service") == "foo.service"
        assert normalize_name(normalize_name("foo")) == "foo.service"


class TestValidate:

    def test_empty_exec_start_fails(self):
        with pytest.raises(ValidationError, match="ExecStart"):
            validate(ServiceDefinition(description="desc", working_directory="/tmp"))

    def test_exec_start_is_enough(self):
        validate(ServiceDefinition(exec_start="/usr/bin/date"))

    def test_validation_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            ServiceDefinition().validate()


class TestRender:

    def test_full_definition(self):
        text = render_string(ServiceDefinition(
            exec_start="/usr/bin/date",
            working_directory="/srv/app",
            description="Just a test",
            after="network.target",
        ))
        assert text == (
            "[Unit]\n"
            "Description=Just a test\n"
            "After=network.target\n"
            "\n"
            "[Service]\n"
            "ExecStart=/usr/bin/date\n"
            "WorkingDirectory=/srv/app\n"
            "\n"
            "[Install]\n"
            "WantedBy=multi-user.target\n"
        )

    def test_optional_fields_omitted(self):
        text = render_string(ServiceDefinition(exec_start="/usr/bin/date"))
        assert "Description=" not in text
        assert "After=" not in text
        assert "WorkingDirectory=" not in text
        assert "ExecStart=/usr/bin/date\n" in text

    def test_no_html_escaping(self):
        text = render_string(ServiceDefinition(exec_start="/bin/sh -c 'a && b > /tmp/<out>'"))
        assert "ExecStart=/bin/sh -c 'a && b > /tmp/<out>'\n" in text

    def test_custom_wanted_by(self):
        text = render_string(ServiceDefinition(exec_start="/usr/bin/date", wanted_by="default.target"))
        assert text.endswith("WantedBy=default.target\n")

    def test_empty_wanted_by_omitted(self):
        text = render_string(ServiceDefinition(exec_start="/usr/bin/date", wanted_by=""))
        assert "WantedBy" not in text
        assert text.endswith("[Install]\n")

    def test_invalid_writes_nothing(self):
        sink = io.StringIO()
        with pytest.raises(ValidationError):
            render(ServiceDefinition(), sink)
        assert sink.getvalue() == ""


class TestServiceDefinitionDict:

    def test_round_trip_keeps_set_fields(self):
        definition = ServiceDefinition(exec_start="/usr/bin/date", after="network.target")
        data = definition.to_dict()
        assert data == {"exec_start": "/usr/bin/date", "after": "network.target",
                        "wanted_by": "multi-user.target"}
        assert ServiceDefinition.from_dict(data) == definition
