# Constants for routine recommendations and the order workflow.
from types import MappingProxyType

# Recommendation limits
DEFAULT_RECOMMENDATIONS = 3
MAX_RECOMMENDATIONS = 10

# K-Beauty 8-step routine (category slug -> step)
ROUTINE_ORDER = MappingProxyType({
    "limpiadores": 1,
    "exfoliantes": 2,
    "tónicos": 3,
    "tonicos": 3,
    "esencias": 4,
    "sérums": 5,
    "serums": 5,
    "mascarillas": 6,
    "hidratantes": 7,
    "protectores": 8,
})
DEFAULT_STEP = 5  # unknown categories sit with the serums

STEP_LABELS = MappingProxyType({
    1: "Limpieza",
    2: "Exfoliación",
    3: "Tónico",
    4: "Esencia",
    5: "Sérum",
    6: "Mascarilla",
    7: "Hidratación",
    8: "Protección Solar",
})

# Scoring
SAME_CATEGORY_SCORE = -20
PROXIMITY_SCORES = MappingProxyType({1: 5, 2: 3, 3: 2})  # step distance -> points
FAR_PROXIMITY_SCORE = 1
UNIVERSAL_SKIN_BONUS = 2
MATCHING_SKIN_BONUS = 3
UNIVERSAL_SKIN_MARKERS = ("todo tipo", "todos", "todo")

# Curated copy for (lower step, higher step) pairs up to distance 3
ADJACENT_REASONS = MappingProxyType({
    (1, 2): "Exfolia después de limpiar para eliminar células muertas y preparar la piel",
    (2, 3): "Aplica el tónico para equilibrar el pH y maximizar la absorción del siguiente paso",
    (3, 4): "Prepara tu piel con el tónico para absorber mejor la esencia",
    (4, 5): "La esencia potencia la penetración del sérum en capas más profundas",
    (5, 6): "Complementa el sérum con una mascarilla para una hidratación intensiva",
    (6, 7): "Sella los beneficios de la mascarilla con una buena hidratación",
    (7, 8): "El último paso AM: fija la hidratación y protege del sol",
    (5, 7): "Sella los activos del sérum con esta hidratación profunda",
    (4, 7): "La esencia y la hidratante forman un dúo perfecto en la rutina coreana",
    (3, 5): "El tónico prepara las capas de la piel para absorber mejor los activos del sérum",
    (1, 3): "Completa la limpieza con un tónico para restaurar el equilibrio natural de tu piel",
})
CURATED_MAX_DISTANCE = 3
REASON_BEFORE = "Úsalo primero para preparar tu piel y potenciar el {label}"
REASON_AFTER = "Aplícalo después para sellar y prolongar el efecto del {label}"

# Order workflow
ORDER_STATUSES = ("pending", "processing", "shipped", "delivered", "cancelled")
ALLOWED_TRANSITIONS = MappingProxyType({
    "pending": ("processing", "cancelled"),
    "processing": ("shipped", "cancelled"),
    "shipped": ("delivered",),
    "delivered": (),   # final
    "cancelled": (),   # final
})
TERMINAL_STATUSES = frozenset(s for s, nxt in ALLOWED_TRANSITIONS.items() if not nxt)
TRACKED_STATUS = "shipped"  # only transition that records a tracking number
DEFAULT_ACTOR = "admin"
