"""Data model for unit-file service definitions."""

from dataclasses import dataclass

from ..exceptions import ValidationError


@dataclass
class ServiceDefinition:
    """Fields rendered into a ``.service`` unit file.

    Attributes:
        exec_start: Command executed when the service is started (required)
        working_directory: Working directory for executed processes
        description: Human readable unit description
        after: Units after which the service should start
        wanted_by: Target that pulls the service in when enabled
    """

    exec_start: str = ""
    working_directory: str = ""
    description: str = ""
    after: str = ""
    wanted_by: str = "multi-user.target"

    def validate(self) -> None:
        """Raise ValidationError if a required field is missing."""
        if not self.exec_start:
            raise ValidationError("service 'ExecStart' is required")

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization.

        Returns:
            Dictionary representation of the definition
        """
        result = {"exec_start": self.exec_start}

        # Optional fields only when set
        for key in ("working_directory", "description", "after"):
            value = getattr(self, key)
            if value:
                result[key] = value
        result["wanted_by"] = self.wanted_by

        return result

    @classmethod
    def from_dict(cls, data: dict) -> 'ServiceDefinition':
        """Create ServiceDefinition from dictionary.

        Args:
            data: Dictionary with definition fields

        Returns:
            ServiceDefinition instance
        """
        return cls(
            exec_start=data.get("exec_start", ""),
            working_directory=data.get("working_directory", ""),
            description=data.get("description", ""),
            after=data.get("after", ""),
            wanted_by=data.get("wanted_by", "multi-user.target"),
        )
