"""Exceptions raised at the participant data boundary."""


class FileProcessingError(ValueError):
    """A participant or team file could not be read or written."""


class InvalidParticipantDataError(ValueError):
    """A participant record holds an unparsable number or an unknown role."""

    def __init__(self, message: str, line_number: int | None = None) -> None:
        super().__init__(message)
        self.line_number = line_number
