"""
Table de prix statique (lecture seule) utilisée quand la base ne fournit aucun prix
ou est indisponible. Les prix de référence sont administrés en base (frame_size_prices).
"""
from types import MappingProxyType
from typing import Mapping, Optional

from .sizes import FrameSize

KEY_HOLDERS = "KEY_HOLDERS"
DEFAULT = "DEFAULT"

STATIC_PRICES: Mapping[str, Mapping[str, float]] = MappingProxyType({
    KEY_HOLDERS: MappingProxyType({
        FrameSize.SIZE_4_5X8_5.value: 104.34,
        FrameSize.SIZE_6X12.value: 184.43,
    }),
    DEFAULT: MappingProxyType({
        FrameSize.SIZE_6X6.value: 179.00,
        FrameSize.SIZE_8_5X8_5.value: 224.33,
        FrameSize.SIZE_8_5X12.value: 254.44,
        FrameSize.SIZE_12X12.value: 299.61,
        FrameSize.SIZE_12X16.value: 359.83,
        FrameSize.SIZE_16X16.value: 405.00,
        FrameSize.SIZE_16X20.value: 450.17,
        FrameSize.SIZE_20X20.value: 510.39,
        FrameSize.SIZE_20X28.value: 600.72,
        FrameSize.SIZE_28X28.value: 751.28,
        FrameSize.SIZE_28X35.value: 1007.23,
        FrameSize.SIZE_35X35.value: 1172.84,
        # Formats legacy
        FrameSize.SMALL.value: 224.33,
        FrameSize.LARGE.value: 299.61,
    }),
})


def table_key(category_name: Optional[str], key_holder_alias: str) -> str:
    return KEY_HOLDERS if category_name == key_holder_alias else DEFAULT


def static_price(frame_size: str, category_name: Optional[str], key_holder_alias: str) -> float:
    """
    Prix statique: table porte-clés si la catégorie est l'alias et connaît le format,
    sinon table par défaut; 0.0 si le format est inconnu partout.
    """
    if table_key(category_name, key_holder_alias) == KEY_HOLDERS:
        price = STATIC_PRICES[KEY_HOLDERS].get(frame_size)
        if price:
            return price
    return STATIC_PRICES[DEFAULT].get(frame_size, 0.0)


def static_lowest(category_name: Optional[str], key_holder_alias: str) -> float:
    return min(STATIC_PRICES[table_key(category_name, key_holder_alias)].values())
