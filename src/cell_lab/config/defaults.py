"""
Default configuration values.
"""

# Vitality bounds
MAX_ENERGY = 100
MIN_ENERGY = 0
DEFAULT_ENERGY = 100
DEFAULT_AGE = 0

# Growth
GROWTH_ENERGY_STEP = 20

# Newborn state (every clone starts here, regardless of parent vitality)
NEWBORN_ENERGY = 80
NEWBORN_AGE = 0

# Division rules: kind -> (energy threshold, energy cost)
DIVISION_RULES = {
    "basic": (50, 30),
    "blood": (50, 30),
    "brain": (60, 40),  # Neurons pay more to divide
}

# Oxygen
MAX_OXYGEN = 100
MIN_OXYGEN = 0
DEFAULT_OXYGEN = 0

# Console dose bounds for "give oxygen"
OXYGEN_DOSE_MIN = 1
OXYGEN_DOSE_MAX = 50

# Template seeds created by every CellFactory
DEFAULT_GENETIC_CODE = "HUMAN_DNA"
DEFAULT_TEMPLATES = {
    "basic": {"kind": "basic", "genetic_code": DEFAULT_GENETIC_CODE},
    "blood": {"kind": "blood", "genetic_code": DEFAULT_GENETIC_CODE, "oxygen_level": 50},
    "brain": {
        "kind": "brain",
        "genetic_code": DEFAULT_GENETIC_CODE,
        "knowledge": ["2+2=4", "sky is blue"],
    },
}

# Batch experiment
DEFAULT_EXPERIMENT_ROUNDS = 1
DEFAULT_EXPERIMENT_GROW_STEPS = 2
EXPERIMENT_OXYGEN_DOSE = 30
EXPERIMENT_LEARNED_FACT = "I can divide myself!"

# Session
DEFAULT_ASSIST_GROWTH = True
ASSIST_GROWTH_STEPS = 2

# Logging
DEFAULT_LOG_LEVEL = "WARNING"
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
