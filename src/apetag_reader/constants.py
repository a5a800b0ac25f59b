# Every APE tag header and footer starts with this preamble.
# http://www.personal.uni-jena.de/~pfk/mpp/sv8/apetag.html
PREAMBLE = b"APETAGEX"
PREAMBLE_SIZE = len(PREAMBLE)

# Header and footer share the same 32 byte layout:
# preamble(8) version(4) size(4) count(4) flags(4) reserved(8)
HEADER_SIZE = 32
HEADER_FORMAT = "<8sIIII8x"

# Per item prefix: value length and item flags
ITEM_PREFIX_FORMAT = "<II"
ITEM_PREFIX_SIZE = 8

# Tags claiming more than this are treated as garbage
MAX_TAG_SIZE = 1024 * 1024

# Chunk size for the linear fallback search
SCAN_CHUNK_SIZE = 4096

# Version field values
APE_VERSION_1 = 1000  # APEv1
APE_VERSION_2 = 2000  # APEv2

# Global flag bits (header/footer)
FLAG_HAS_HEADER = 1 << 31
FLAG_HAS_NO_FOOTER = 1 << 30
FLAG_IS_HEADER = 1 << 29

# Item flag bits 1-2 hold the value encoding, 0 means UTF-8 text
ITEM_ENCODING_MASK = 6
ITEM_ENCODING_UTF8 = 0
ITEM_ENCODING_BINARY = 2
ITEM_ENCODING_EXTERNAL = 4

# Keys are ASCII, 2..255 characters
KEY_ENCODING = "ascii"

# Date style keys are folded into "date" and cut down to the year
DATE_KEY = "date"
DATE_KEY_ALIASES = ("record date", "year")
YEAR_LENGTH = 4
