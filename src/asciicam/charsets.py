# Ramps run from densest to sparsest glyph. Inverting reverses the string.
DEFAULT_RAMP = "@%#*+=-:. "

RAMPS = {
    "default": DEFAULT_RAMP,
    "short": "@#+-. ",
    "blocks": "█▓▒░ ",
    "long": "$@B%8&WM#*oahkbdpqwmZO0QLCJUYXzcvunxrjft/\\|()1{}[]?-_+~<>i!lI;:,\"^`'. ",
}
