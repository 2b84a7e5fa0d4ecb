"""
Formats et finitions de cadres: identifiants canoniques et table de correspondance
explicite depuis les jetons envoyés par le client ("12x12", '12" x 12"', "SIZE_12X12").
Un jeton inconnu est rejeté (ValueError), jamais deviné.
"""
from enum import Enum
from typing import Dict


class FrameSize(str, Enum):
    SIZE_4_5X8_5 = "SIZE_4_5X8_5"
    SIZE_6X6 = "SIZE_6X6"
    SIZE_6X12 = "SIZE_6X12"
    SIZE_8_5X8_5 = "SIZE_8_5X8_5"
    SIZE_8_5X12 = "SIZE_8_5X12"
    SIZE_12X12 = "SIZE_12X12"
    SIZE_12X16 = "SIZE_12X16"
    SIZE_16X16 = "SIZE_16X16"
    SIZE_16X20 = "SIZE_16X20"
    SIZE_20X20 = "SIZE_20X20"
    SIZE_20X28 = "SIZE_20X28"
    SIZE_28X28 = "SIZE_28X28"
    SIZE_28X35 = "SIZE_28X35"
    SIZE_35X35 = "SIZE_35X35"
    # Formats legacy encore présents dans d'anciennes commandes
    SMALL = "SMALL"
    LARGE = "LARGE"


class FrameType(str, Enum):
    PINE = "PINE"
    DARK = "DARK"


# Dimensions (pouces) -> format canonique. Les formats legacy n'ont pas de dimension propre.
_DIMENSIONS: Dict[str, FrameSize] = {
    "4.5x8.5": FrameSize.SIZE_4_5X8_5,
    "6x6": FrameSize.SIZE_6X6,
    "6x12": FrameSize.SIZE_6X12,
    "8.5x8.5": FrameSize.SIZE_8_5X8_5,
    "8.5x12": FrameSize.SIZE_8_5X12,
    "12x12": FrameSize.SIZE_12X12,
    "12x16": FrameSize.SIZE_12X16,
    "16x16": FrameSize.SIZE_16X16,
    "16x20": FrameSize.SIZE_16X20,
    "20x20": FrameSize.SIZE_20X20,
    "20x28": FrameSize.SIZE_20X28,
    "28x28": FrameSize.SIZE_28X28,
    "28x35": FrameSize.SIZE_28X35,
    "35x35": FrameSize.SIZE_35X35,
}

FRAME_SIZE_LABELS: Dict[FrameSize, str] = {
    FrameSize.SIZE_4_5X8_5: '4.5" x 8.5"',
    FrameSize.SIZE_6X6: '6" x 6"',
    FrameSize.SIZE_6X12: '6" x 12"',
    FrameSize.SIZE_8_5X8_5: '8.5" x 8.5"',
    FrameSize.SIZE_8_5X12: '8.5" x 12"',
    FrameSize.SIZE_12X12: '12" x 12"',
    FrameSize.SIZE_12X16: '12" x 16"',
    FrameSize.SIZE_16X16: '16" x 16"',
    FrameSize.SIZE_16X20: '16" x 20"',
    FrameSize.SIZE_20X20: '20" x 20"',
    FrameSize.SIZE_20X28: '20" x 28"',
    FrameSize.SIZE_28X28: '28" x 28"',
    FrameSize.SIZE_28X35: '28" x 35"',
    FrameSize.SIZE_35X35: '35" x 35"',
    FrameSize.SMALL: '8.5" x 8.5"',
    FrameSize.LARGE: '12" x 12"',
}

_FRAME_TYPES: Dict[str, FrameType] = {
    "pine": FrameType.PINE,
    "pine wood": FrameType.PINE,
    "dark": FrameType.DARK,
    "dark wood": FrameType.DARK,
}

FRAME_TYPE_LABELS: Dict[FrameType, str] = {
    FrameType.PINE: "Pine Wood",
    FrameType.DARK: "Dark Wood",
}


def _dimension_key(token: str) -> str:
    # '12" x 12"' -> "12x12"
    return "".join(token.split()).replace('"', "").lower()


def parse_frame_size(token: str) -> FrameSize:
    """
    Convertit un jeton client en FrameSize.
    - Accepte l'identifiant canonique (insensible à la casse) ou la dimension ("12x12", '12" x 12"').
    - Soulève ValueError pour tout autre jeton.
    """
    raw = (token or "").strip()
    if raw.upper() in FrameSize.__members__:
        return FrameSize[raw.upper()]
    size = _DIMENSIONS.get(_dimension_key(raw))
    if size is None:
        raise ValueError(f"Format de cadre inconnu: {token!r}")
    return size


def parse_frame_type(token: str) -> FrameType:
    raw = (token or "").strip()
    if raw.upper() in FrameType.__members__:
        return FrameType[raw.upper()]
    frame_type = _FRAME_TYPES.get(" ".join(raw.lower().split()))
    if frame_type is None:
        raise ValueError(f"Finition de cadre inconnue: {token!r}")
    return frame_type


def frame_size_label(size: FrameSize | str) -> str:
    try:
        return FRAME_SIZE_LABELS[FrameSize(size)]
    except ValueError:
        return str(size)


def frame_type_label(frame_type: FrameType | str) -> str:
    try:
        return FRAME_TYPE_LABELS[FrameType(frame_type)]
    except ValueError:
        return str(frame_type)
