class PixEncodingError(ValueError):
    """Base class for every failure raised while building a Pix payload."""


class InvalidAmount(PixEncodingError):
    """Amount is zero, negative, not a number or rounds below one cent."""


class FieldOverflow(PixEncodingError):
    """A field value does not fit the two-digit length prefix."""

    def __init__(self, field_id: str, length: int):
        self.field_id = field_id
        self.length = length
        super().__init__(
            f"Field {field_id} value has {length} characters (max 99)"
        )


class EncodingFailure(PixEncodingError):
    """Any other failure while normalizing or assembling a payload."""
