"""
Field region definitions for the Turkish ID card (TCKK).

Coordinates are normalized fractions of the canonical card (856x540 for
ISO/IEC 7810 ID-1 at ~10 px/mm), so the same table serves the portrait
warp as well.

Front layout (approximate):
    +----------------------------------+
    | T.C.                    [PHOTO]  |
    | KIMLIK KARTI                     |
    | T.C. Kimlik No: XXXXXXXXXXX      |
    | Soyadi: XXXXXX                   |
    | Adi: XXXXX                       |
    | Dogum Tarihi: XX.XX.XXXX         |
    | Seri No: XXXXXXXXX               |
    |                    [HOLOGRAM]    |
    +----------------------------------+

Back layout (approximate):
    +----------------------------------+
    | [CHIP]     Aciklamalar    [BAR]  |
    |                           [COD]  |
    |----------------------------------|
    | I<TURXXXXXXXXX2<XXXXXXXXXXX<<<   |  MRZ line 1
    | YYMMDDXMYYMMDDXTUR<<<<<<<<<<<X   |  MRZ line 2
    | SURNAME<<FIRSTNAME<<<<<<<<<<<    |  MRZ line 3
    +----------------------------------+

The tables are read-only for the life of the process.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from types import MappingProxyType
from typing import Mapping, Tuple, Union


class FieldType(IntEnum):
    """Semantic card fields. Values match the platform bridge ordinals."""

    TCKN = 0  # 11-digit national identifier (front, top-left)
    SURNAME = 1
    NAME = 2
    MRZ = 3  # Machine Readable Zone (back, bottom 28%)
    PHOTO = 4  # Holder photo (front, right side)
    SERIAL = 5  # Serial number (Seri No)
    BIRTHDATE = 6
    EXPIRY = 7  # No rectangle: read from MRZ line 2


class CardZone(Enum):
    """Auxiliary zones used for glare checks and line-by-line MRZ reads."""

    HOLOGRAM = "hologram"
    CHIP = "chip"
    BARCODE = "barcode"
    MRZ_LINE1 = "mrz_line1"
    MRZ_LINE2 = "mrz_line2"
    MRZ_LINE3 = "mrz_line3"


@dataclass(frozen=True)
class RegionDefinition:
    """
    Normalized field rectangle plus its preprocessing hints.

    Attributes:
        x_pct: Left edge as a fraction of card width.
        y_pct: Top edge as a fraction of card height.
        w_pct: Width as a fraction of card width.
        h_pct: Height as a fraction of card height.
        invert: Invert colors before thresholding.
        block_size: Adaptive threshold block size; 0 selects Otsu.
        constant_c: Adaptive threshold constant.
    """

    x_pct: float
    y_pct: float
    w_pct: float
    h_pct: float
    invert: bool = False
    block_size: int = 0
    constant_c: int = 0

    @property
    def uses_global_threshold(self) -> bool:
        return self.block_size == 0

    @property
    def effective_block_size(self) -> int:
        """Block size coerced to an odd value of at least 3."""
        block = self.block_size
        if block % 2 == 0:
            block += 1
        return max(3, block)


FRONT_REGIONS: Mapping[FieldType, RegionDefinition] = MappingProxyType(
    {
        FieldType.TCKN: RegionDefinition(0.03, 0.20, 0.28, 0.12, False, 15, 8),
        FieldType.SURNAME: RegionDefinition(0.03, 0.38, 0.55, 0.10, False, 21, 5),
        FieldType.NAME: RegionDefinition(0.03, 0.48, 0.55, 0.10, False, 21, 5),
        FieldType.BIRTHDATE: RegionDefinition(0.03, 0.58, 0.40, 0.10, False, 17, 6),
        FieldType.SERIAL: RegionDefinition(0.03, 0.68, 0.35, 0.10, False, 15, 7),
        # Photo feeds face matching; never binarized
        FieldType.PHOTO: RegionDefinition(0.68, 0.18, 0.28, 0.45, False, 0, 0),
    }
)

BACK_MRZ_REGION = RegionDefinition(0.0, 0.72, 1.0, 0.28, True, 11, 4)

ZONES: Mapping[CardZone, RegionDefinition] = MappingProxyType(
    {
        CardZone.HOLOGRAM: RegionDefinition(0.65, 0.70, 0.32, 0.25),
        CardZone.CHIP: RegionDefinition(0.02, 0.05, 0.20, 0.25),
        CardZone.BARCODE: RegionDefinition(0.88, 0.05, 0.10, 0.60),
        CardZone.MRZ_LINE1: RegionDefinition(0.02, 0.73, 0.96, 0.08, True, 11, 4),
        CardZone.MRZ_LINE2: RegionDefinition(0.02, 0.81, 0.96, 0.08, True, 11, 4),
        CardZone.MRZ_LINE3: RegionDefinition(0.02, 0.89, 0.96, 0.08, True, 11, 4),
    }
)

MRZ_LINE_ZONES = (CardZone.MRZ_LINE1, CardZone.MRZ_LINE2, CardZone.MRZ_LINE3)

# Character sets handed to the external OCR engine; not enforced here
DIGITS_ONLY = "0123456789"
TURKISH_ALPHA = "ABCÇDEFGĞHIİJKLMNOÖPRSŞTUÜVYZ "
MRZ_CHARSET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789<"
ALPHANUMERIC = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
DATE_CHARS = "0123456789."

OCR_WHITELISTS: Mapping[FieldType, str] = MappingProxyType(
    {
        FieldType.TCKN: DIGITS_ONLY,
        FieldType.BIRTHDATE: DIGITS_ONLY,
        FieldType.EXPIRY: DIGITS_ONLY,
        FieldType.SURNAME: TURKISH_ALPHA,
        FieldType.NAME: TURKISH_ALPHA,
        FieldType.MRZ: MRZ_CHARSET,
        FieldType.SERIAL: ALPHANUMERIC,
    }
)


def as_field_type(field_type: Union[FieldType, int]) -> FieldType:
    """
    Accept a FieldType or its bridge ordinal.

    Raises:
        ValueError: If the ordinal is unknown.
    """
    return FieldType(int(field_type))


def get_region_definition(
    field_type: Union[FieldType, int], is_back_side: bool = False
) -> RegionDefinition:
    """
    Look up the rectangle and preprocessing hint for a field.

    The back side only exposes the MRZ: every back-side request resolves to
    it. On the front, types without a front rectangle (MRZ, EXPIRY) fall
    back to the TCKN region.

    Example:
        >>> get_region_definition(FieldType.NAME).block_size
        21
        >>> get_region_definition(FieldType.PHOTO, is_back_side=True) is BACK_MRZ_REGION
        True
    """
    field_type = as_field_type(field_type)

    if is_back_side:
        return BACK_MRZ_REGION

    return FRONT_REGIONS.get(field_type, FRONT_REGIONS[FieldType.TCKN])


def get_ocr_whitelist(field_type: Union[FieldType, int]) -> str:
    """Character whitelist for the OCR engine; PHOTO has none."""
    return OCR_WHITELISTS.get(as_field_type(field_type), "")


def get_side_fields(is_back_side: bool = False) -> Tuple[FieldType, ...]:
    """
    Fields that have their own rectangle on one side of the card.

    Types that only resolve through the TCKN fallback (MRZ and EXPIRY on the
    front) are left out.

    Example:
        >>> get_side_fields(is_back_side=True)
        (<FieldType.MRZ: 3>,)
    """
    if is_back_side:
        return (FieldType.MRZ,)
    return tuple(FRONT_REGIONS)
