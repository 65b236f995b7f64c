from dataclasses import dataclass

from pixcode.core.pix_errors import EncodingFailure, FieldOverflow


MAX_FIELD_LENGTH = 99


@dataclass(frozen=True)
class EncodedField:
    """One id + length + value field of a BR Code payload.

    Construction validates the id and the 99 character ceiling, so every
    instance serialises to a well-formed field.
    """

    id: str
    value: str

    def __post_init__(self):
        if not isinstance(self.id, str) or len(self.id) != 2 or not self.id.isdigit():
            raise EncodingFailure(f"Invalid field id {self.id!r}")
        if not isinstance(self.value, str):
            raise EncodingFailure(f"Field {self.id} value must be text")
        if len(self.value) > MAX_FIELD_LENGTH:
            raise FieldOverflow(self.id, len(self.value))

    @property
    def length(self) -> str:
        return f"{len(self.value):02d}"

    def serialize(self) -> str:
        return f"{self.id}{self.length}{self.value}"

    def __str__(self) -> str:
        return self.serialize()


def encode_field(field_id: str, value: str) -> str:
    return EncodedField(field_id, value).serialize()


def encode_template(field_id: str, *children: EncodedField) -> EncodedField:
    """Nest already-encoded sub-fields as the value of ``field_id``."""
    return EncodedField(field_id, "".join(child.serialize() for child in children))
