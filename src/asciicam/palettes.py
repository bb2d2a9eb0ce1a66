Colour = tuple[int, int, int]

# Indie game palette, 16 colours
INDIE = [
    (0, 0, 0),
    (34, 32, 52),
    (69, 40, 60),
    (102, 57, 49),
    (143, 86, 59),
    (223, 113, 38),
    (217, 160, 102),
    (238, 195, 154),
    (251, 242, 54),
    (153, 229, 80),
    (106, 190, 48),
    (55, 148, 110),
    (75, 105, 186),
    (91, 110, 225),
    (203, 219, 252),
    (255, 255, 255),
]

PICO8 = [
    (0, 0, 0),
    (29, 43, 83),
    (126, 37, 83),
    (0, 135, 81),
    (171, 82, 54),
    (95, 87, 79),
    (194, 195, 199),
    (255, 241, 232),
    (255, 0, 77),
    (255, 163, 0),
    (255, 236, 39),
    (0, 228, 54),
    (41, 173, 255),
    (131, 118, 156),
    (255, 119, 168),
    (255, 204, 170),
]

GAMEBOY = [(15, 56, 15), (48, 98, 48), (139, 172, 15), (155, 188, 15)]

MONO = [(0, 0, 0), (255, 255, 255)]

GRAYSCALE = [(v, v, v) for v in (0, 36, 73, 109, 146, 182, 219, 255)]

PALETTES: dict[str, list[Colour]] = {
    "indie": INDIE,
    "pico8": PICO8,
    "gameboy": GAMEBOY,
    "mono": MONO,
    "grayscale": GRAYSCALE,
}

DEFAULT_PALETTE = "indie"


def validate_palette(colours) -> list[Colour]:
    """Check a palette is a non-empty list of RGB triples with channels in 0-255."""
    result = []
    for colour in colours:
        if len(colour) != 3:
            raise ValueError(f"Palette entries must be RGB triples, got {colour!r}")
        if any(not 0 <= int(c) <= 255 for c in colour):
            raise ValueError(f"Palette channel out of range 0-255: {colour!r}")
        result.append(tuple(int(c) for c in colour))
    if not result:
        raise ValueError("Palette must contain at least one colour")
    return result


def register_palette(name: str, colours) -> None:
    PALETTES[name] = validate_palette(colours)


def get_palette(name: str) -> list[Colour]:
    if name not in PALETTES:
        raise KeyError(f"Unknown palette {name!r}. Available: {', '.join(palette_names())}")
    return PALETTES[name]


def palette_names() -> list[str]:
    return sorted(PALETTES)
