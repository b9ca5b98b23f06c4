"""
Prompt Builder

Assembles the structured payload and the instruction document sent to the
external evaluator.

The instruction text is the contract with the evaluator model: its wording,
section order and output schema must stay stable so that scores remain
comparable across runs.
"""

import json
from datetime import datetime, timezone

from graphomotor_eval.domain.constants import (
    DEFAULT_EXERCISE_TYPE,
    DEFAULT_LEVEL,
    DEFAULT_PATIENT_LABEL,
    DEFAULT_SESSION_LABEL,
)
from graphomotor_eval.domain.value_objects import (
    BuiltRequest,
    EvaluationRequest,
    ExerciseContext,
    ExpectedShape,
    Trace,
)
from graphomotor_eval.normalizer import normalize
from graphomotor_eval.service_config import EvaluatorModelConfig


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with milliseconds and a Z suffix"""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _plain_number(value):
    """Serialize integral floats without a decimal part (5.0 -> 5)"""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _points_to_json(points: Trace) -> list[dict]:
    return [{"x": _plain_number(p.x), "y": _plain_number(p.y)} for p in points]


def build_payload(
    user_trace: Trace,
    model_trace: Trace,
    expected_shape: ExpectedShape,
    context: ExerciseContext | None = None,
) -> dict:
    """
    Build the structured coordinate payload

    Both traces are normalized independently. Context fields left unset fall
    back to their defaults; the timestamp defaults to the current time.

    Args:
        user_trace: Trace drawn by the patient
        model_trace: Reference trace
        expected_shape: Shape the patient was asked to draw
        context: Exercise context (optional)

    Returns:
        Payload dictionary with usuario / modelo / ejercicio / contexto sections
    """
    user_points = _points_to_json(normalize(user_trace))
    model_points = _points_to_json(normalize(model_trace))

    return {
        "usuario": {
            "puntos": user_points,
            "descripcion": f"Trazo del usuario con {len(user_points)} puntos",
        },
        "modelo": {
            "puntos": model_points,
            "descripcion": f"Modelo de referencia con {len(model_points)} puntos",
        },
        "ejercicio": {
            "tipo": (context and context.exercise_type) or DEFAULT_EXERCISE_TYPE,
            "figuraEsperada": expected_shape.label,
            "nivel": (context and context.level) or DEFAULT_LEVEL,
        },
        "contexto": {
            "paciente": (context and context.patient_label) or DEFAULT_PATIENT_LABEL,
            "sesion": (context and context.session_label) or DEFAULT_SESSION_LABEL,
            "fecha": (context and context.timestamp) or utc_timestamp(),
        },
    }


def build_instruction_text(payload: dict) -> str:
    """Render the evaluator instructions for a payload built by build_payload"""
    ejercicio = payload["ejercicio"]
    contexto = payload["contexto"]
    user_points = payload["usuario"]["puntos"]
    model_points = payload["modelo"]["puntos"]

    parts: list[str] = [
        "",
        "Eres un experto en terapia ocupacional y análisis de grafomotricidad pediátrica. ",
        "",
        "**TAREA:** Analiza las coordenadas de un ejercicio de grafomotricidad y evalúa la precisión "
        "del trazo del usuario comparándolo con el modelo de referencia.",
        "",
        "**DATOS DEL EJERCICIO:**",
        f"- Tipo: {ejercicio['tipo']}",
        f"- Figura esperada: {ejercicio['figuraEsperada']}",
        f"- Nivel: {ejercicio['nivel']}",
        f"- Paciente: {contexto['paciente']}",
        f"- Fecha: {contexto['fecha']}",
        "",
        f"**COORDENADAS DEL USUARIO ({len(user_points)} puntos):**",
        json.dumps(user_points, indent=2, ensure_ascii=False),
        "",
        f"**COORDENADAS DEL MODELO ({len(model_points)} puntos):**",
        json.dumps(model_points, indent=2, ensure_ascii=False),
        "",
        "**INSTRUCCIONES DE EVALUACIÓN:**",
        "",
        "1. **DETECTA LA FORMA:** Analiza las coordenadas del usuario y determina qué forma geométrica dibujó.",
        "",
        "2. **COMPARA CON EL MODELO:** Evalúa qué tan similar es el trazo del usuario al modelo de referencia.",
        "",
        "3. **CALCULA MÉTRICAS:**",
        "   - Precisión (0-1): Qué tan exacto es el trazo",
        "   - Cobertura (0-1): Qué porcentaje del modelo está cubierto",
        "   - Similitud (0-1): Qué tan similar es la forma general",
        "",
        "4. **IDENTIFICA PROBLEMAS:**",
        "   - Errores en la forma geométrica",
        "   - Problemas de proporción",
        "   - Desviaciones del modelo",
        "   - Fortalezas del trazo",
        "",
        "5. **GENERA SUGERENCIAS:** Recomendaciones específicas para mejorar.",
        "",
        "**FORMATO DE RESPUESTA (JSON):**",
        "{",
        '  "puntuacion": 85,',
        '  "analisis": "El paciente demostró buena precisión en el trazado del cuadrado. '
        "Las esquinas están bien definidas y las proporciones son adecuadas. "
        'Se observa una ligera desviación en la esquina superior derecha.",',
        '  "formaDetectada": "cuadrado",',
        '  "precision": 0.85,',
        '  "cobertura": 0.92,',
        '  "sugerencias": [',
        '    "Trabajar en la precisión de las esquinas",',
        '    "Practicar el control del lápiz en líneas rectas",',
        '    "Continuar con ejercicios de formas geométricas básicas"',
        "  ],",
        '  "detalles": {',
        '    "similitud": 0.88,',
        '    "errores": ["Esquina superior derecha ligeramente redondeada"],',
        '    "fortalezas": ["Buenas proporciones", "Esquinas bien definidas", "Trazo continuo"]',
        "  }",
        "}",
        "",
        "**IMPORTANTE:**",
        "- Responde SOLO en formato JSON válido",
        "- La puntuación debe ser un número entero entre 0-100",
        "- Las métricas deben ser números entre 0-1",
        "- Sé específico y constructivo en el análisis",
        "- Considera que es un ejercicio pediátrico, sé comprensivo pero preciso",
        "",
    ]
    return "\n".join(parts)


def build_request(
    user_trace: Trace,
    model_trace: Trace,
    expected_shape: ExpectedShape,
    context: ExerciseContext | None = None,
) -> BuiltRequest:
    """
    Build the payload and instruction text for one evaluation

    Traces must already have passed validate_input_lengths; no bounds are
    enforced here.

    Returns:
        BuiltRequest
    """
    payload = build_payload(user_trace, model_trace, expected_shape, context)
    return BuiltRequest(payload=payload, instruction_text=build_instruction_text(payload))


def build_submission(
    request: EvaluationRequest,
    evaluator: EvaluatorModelConfig | None = None,
) -> dict:
    """
    Build the POST body sent to the evaluation backend

    Args:
        request: Evaluation request
        evaluator: Model settings (defaults if not provided)

    Returns:
        Body with prompt, coordenadas and configuracion
    """
    if evaluator is None:
        evaluator = EvaluatorModelConfig()

    built = build_request(
        request.user_trace,
        request.model_trace,
        request.context.expected_shape,
        request.context,
    )
    return {
        "prompt": built.instruction_text,
        "coordenadas": built.payload,
        "configuracion": {
            "modelo": evaluator.model,
            "temperatura": evaluator.temperature,
            "maxTokens": evaluator.max_tokens,
        },
    }
