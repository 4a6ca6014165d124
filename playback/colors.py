"""
Driver color table for the LED map.
"""
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, NamedTuple, Optional


class RGB(NamedTuple):
    r: int
    g: int
    b: int

    @property
    def hex(self) -> str:
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"


WHITE = RGB(255, 255, 255)
BLACK = RGB(0, 0, 0)


class ColorTable(Mapping[int, RGB]):
    """
    Read-only mapping of driver number -> RGB color.

    Built once at startup and shared by reference; there is no way to
    mutate it afterwards. Unmapped drivers get the fallback color.
    """

    def __init__(self, colors: Optional[Mapping[int, RGB]] = None, fallback: RGB = WHITE):
        self._colors = MappingProxyType(
            {int(k): RGB(*v) for k, v in (colors or {}).items()}
        )
        self._fallback = RGB(*fallback)

    @property
    def fallback(self) -> RGB:
        return self._fallback

    def color_for(self, entity_id: int) -> RGB:
        return self._colors.get(entity_id, self._fallback)

    def __getitem__(self, entity_id: int) -> RGB:
        return self._colors[entity_id]

    def __iter__(self) -> Iterator[int]:
        return iter(self._colors)

    def __len__(self) -> int:
        return len(self._colors)

    def __repr__(self) -> str:
        return f"ColorTable({dict(self._colors)!r}, fallback={self._fallback!r})"


# 2023 grid, team colors
DEFAULT_DRIVER_COLORS: Dict[int, RGB] = {
    1: RGB(30, 65, 255),      # VER  Red Bull
    2: RGB(0, 82, 255),       # SAR  Williams
    4: RGB(255, 135, 0),      # NOR  McLaren
    10: RGB(2, 144, 240),     # GAS  Alpine
    11: RGB(30, 65, 255),     # PER  Red Bull
    14: RGB(0, 110, 120),     # ALO  Aston Martin
    16: RGB(220, 0, 0),       # LEC  Ferrari
    18: RGB(0, 110, 120),     # STR  Aston Martin
    20: RGB(160, 207, 205),   # MAG  Haas
    22: RGB(60, 130, 200),    # TSU  AlphaTauri
    23: RGB(0, 82, 255),      # ALB  Williams
    24: RGB(165, 160, 155),   # ZHO  Stake
    27: RGB(160, 207, 205),   # HUL  Haas
    31: RGB(2, 144, 240),     # OCO  Alpine
    40: RGB(60, 130, 200),    # LAW  AlphaTauri
    44: RGB(0, 210, 190),     # HAM  Mercedes
    55: RGB(220, 0, 0),       # SAI  Ferrari
    63: RGB(0, 210, 190),     # RUS  Mercedes
    77: RGB(165, 160, 155),   # BOT  Stake
    81: RGB(255, 135, 0),     # PIA  McLaren
}


def default_color_table() -> ColorTable:
    return ColorTable(DEFAULT_DRIVER_COLORS, fallback=WHITE)
