"""
Domain Constants

Centrally manages constants shared across the evaluation pipeline.
"""

# Trace length bounds accepted for evaluation
MIN_TRACE_POINTS = 3
MAX_TRACE_POINTS = 500

# Normalized coordinate frame (dominant axis maps to 0..NORMALIZED_SPAN)
NORMALIZED_SPAN = 100

# Batch dispatch
DEFAULT_BATCH_SIZE = 5
DEFAULT_BATCH_PAUSE_SECONDS = 1.0

# Evaluator model configuration sent with every submission
DEFAULT_EVALUATOR_MODEL = "gpt-4"
DEFAULT_EVALUATOR_TEMPERATURE = 0.3
DEFAULT_EVALUATOR_MAX_TOKENS = 1000

# Exercise context defaults (Spanish, embedded verbatim in the payload)
DEFAULT_EXERCISE_TYPE = "grafomotricidad"
DEFAULT_LEVEL = "básico"
DEFAULT_PATIENT_LABEL = "Paciente"
DEFAULT_SESSION_LABEL = "Sesión actual"

# Backend endpoints
EVALUATION_PATH = "/api/evaluaciones/chatgpt"
STATUS_PATH = "/api/evaluaciones/chatgpt/status"
STATS_PATH = "/api/evaluaciones/chatgpt/stats"
