"""Unit-file rendering for service definitions."""

import logging
from io import StringIO
from typing import TextIO

from .constants import SERVICE_EXT

logger = logging.getLogger(__name__)

# Unit file written for every service definition; optional keys are
# rendered as whole lines so empty values never produce "Key=" entries
SERVICE_TEMPLATE = """[Unit]
{unit_lines}
[Service]
{service_lines}
[Install]
{install_lines}"""


def normalize_name(name: str) -> str:
    """Append the '.service' suffix to *name* unless it is already there."""
    if not name.endswith(SERVICE_EXT):
        name += SERVICE_EXT
    return name


def _key_lines(*pairs) -> str:
    return "".join(f"{key}={value}\n" for key, value in pairs if value)


def validate(definition) -> None:
    """Check the required fields of *definition*.

    Raises:
        ValidationError: If ExecStart is empty
    """
    definition.validate()


def render(definition, sink: TextIO) -> None:
    """Validate *definition* and write the rendered unit file to *sink*.

    Args:
        definition: ServiceDefinition to render
        sink: Writable text stream

    Raises:
        ValidationError: If a required field is missing; nothing is written
    """
    validate(definition)
    sink.write(SERVICE_TEMPLATE.format(
        unit_lines=_key_lines(
            ("Description", definition.description),
            ("After", definition.after),
        ),
        service_lines=_key_lines(
            ("ExecStart", definition.exec_start),
            ("WorkingDirectory", definition.working_directory),
        ),
        install_lines=_key_lines(("WantedBy", definition.wanted_by)),
    ))


def render_string(definition) -> str:
    """Return the rendered unit file for *definition* as a string."""
    buf = StringIO()
    render(definition, buf)
    return buf.getvalue()
