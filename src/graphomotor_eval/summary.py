"""
Summary Formatter

Renders a validated EvaluationResult as a Markdown report for the therapist.
"""

import math

from graphomotor_eval.domain.entities import EvaluationResult


def _percent(value: float) -> int:
    return math.floor(value * 100 + 0.5)


def _bullets(items: list[str]) -> str:
    return "\n".join(f"- {item}" for item in items)


def format_summary(result: EvaluationResult) -> str:
    """
    Render the evaluation report

    Sections: overall result, analysis, strengths, areas for improvement,
    suggestions. List fields produce one bullet per item, in order.
    """
    parts = [
        "",
        "# 🎯 Evaluación con ChatGPT",
        "",
        "## 📊 Resultado General",
        f"- **Puntuación:** {result.score}/100",
        f"- **Forma detectada:** {result.detected_shape}",
        f"- **Precisión:** {_percent(result.precision)}%",
        f"- **Cobertura:** {_percent(result.coverage)}%",
        "",
        "## 📝 Análisis",
        result.analysis,
        "",
        "## ✅ Fortalezas",
        _bullets(result.details.strengths),
        "",
        "## ⚠️ Áreas de Mejora",
        _bullets(result.details.errors),
        "",
        "## 💡 Sugerencias",
        _bullets(result.suggestions),
        "",
    ]
    return "\n".join(parts)
