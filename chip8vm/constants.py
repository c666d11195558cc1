"""Machine-wide constants for the CHIP-8 interpreter."""

# ==============================
# Memory layout
# ==============================
MEM_SIZE = 4096
PROGRAM_START = 0x200
FONT_ADDRESS = 0x000  # glyphs live in the reserved area below the program
GLYPH_SIZE = 5

# Bytes appended after the loaded program when sizing the address space
MEMORY_HEADROOM = 5000

INSTRUCTION_SIZE = 2

# The call stack grows downward from STACK_TOP, two bytes per return address
STACK_TOP = 0xFA0
STACK_DEPTH = 16
STACK_LIMIT = STACK_TOP - INSTRUCTION_SIZE * STACK_DEPTH

# Programs must end below the stack region
MAX_PROGRAM_SIZE = STACK_LIMIT - PROGRAM_START

# ==============================
# Display
# ==============================
SCREEN_W, SCREEN_H = 64, 32

# ==============================
# Clocks
# ==============================
TIMER_HZ = 60
DEFAULT_CLOCK_HZ = 700

# Classic CHIP-8 4x5 font (each char 5 bytes)
FONTSET = [
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80   # F
]
