"""Domain entity for the patent being licensed — a singleton record."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PatentConfig:
    """Patent metadata printed on every certificate.

    ``background_url`` is either empty (default certificate style), a
    ``data:`` URL with an embedded image, or a remote image URL.
    """

    patent_name: str
    patent_no: str
    background_url: str = ""
