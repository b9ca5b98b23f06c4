"""
Tests for the Markdown report (summary.py)
"""

import json

from graphomotor_eval.domain.entities import EvaluationResult, ResultDetails
from graphomotor_eval.scoring.response_validator import validate_response
from graphomotor_eval.summary import format_summary


def _result(**overrides):
    fields = dict(
        score=85,
        analysis="El trazo mantiene la forma general.",
        detected_shape="cuadrado",
        precision=0.8,
        coverage=0.9,
        suggestions=["Practicar esquinas", "Reducir velocidad"],
        details=ResultDetails(
            similarity=0.85,
            errors=["Esquina inferior abierta"],
            strengths=["Líneas rectas", "Buen tamaño"],
        ),
    )
    fields.update(overrides)
    return EvaluationResult(**fields)


class TestFormatSummary:

    def test_exact_rendering(self):
        assert format_summary(_result()) == (
            "\n"
            "# 🎯 Evaluación con ChatGPT\n"
            "\n"
            "## 📊 Resultado General\n"
            "- **Puntuación:** 85/100\n"
            "- **Forma detectada:** cuadrado\n"
            "- **Precisión:** 80%\n"
            "- **Cobertura:** 90%\n"
            "\n"
            "## 📝 Análisis\n"
            "El trazo mantiene la forma general.\n"
            "\n"
            "## ✅ Fortalezas\n"
            "- Líneas rectas\n"
            "- Buen tamaño\n"
            "\n"
            "## ⚠️ Áreas de Mejora\n"
            "- Esquina inferior abierta\n"
            "\n"
            "## 💡 Sugerencias\n"
            "- Practicar esquinas\n"
            "- Reducir velocidad\n"
        )

    def test_percentages_round_half_up(self):
        text = format_summary(_result(precision=0.125, coverage=0.0625))
        assert "- **Precisión:** 13%" in text
        assert "- **Cobertura:** 6%" in text

    def test_empty_lists_render_empty_sections(self):
        text = format_summary(_result(suggestions=[], details=ResultDetails()))
        assert "## ✅ Fortalezas\n\n\n## ⚠️ Áreas de Mejora" in text
        assert text.endswith("## 💡 Sugerencias\n\n")

    def test_section_order(self):
        text = format_summary(_result())
        headings = ["## 📊", "## 📝", "## ✅", "## ⚠️", "## 💡"]
        positions = [text.index(h) for h in headings]
        assert positions == sorted(positions)

    def test_report_of_validated_reply(self):
        raw = json.dumps({
            "puntuacion": 150,
            "analisis": "Excelente",
            "formaDetectada": "circulo",
            "precision": 1.0,
            "sugerencias": ["Seguir así"],
        })
        text = format_summary(validate_response(raw))
        assert "- **Puntuación:** 100/100" in text
        assert "- **Forma detectada:** circulo" in text
        assert "- **Precisión:** 100%" in text
        assert "- **Cobertura:** 0%" in text
        assert "- Seguir así" in text

    def test_report_of_full_validated_reply(self):
        raw = json.dumps({
            "puntuacion": 78,
            "analisis": "Forma reconocible con esquinas redondeadas.",
            "formaDetectada": "cuadrado",
            "precision": 0.75,
            "cobertura": 0.5,
            "sugerencias": ["Marcar las esquinas", "Trazar más despacio"],
            "detalles": {
                "similitud": 0.7,
                "errores": ["Esquina superior abierta", "Lado derecho inclinado", "Trazo tembloroso"],
                "fortalezas": ["Tamaño adecuado", "Figura cerrada"],
            },
        }, ensure_ascii=False)
        text = format_summary(validate_response(f"```json\n{raw}\n```"))

        assert "- **Puntuación:** 78/100" in text
        assert "- **Precisión:** 75%" in text
        assert "- **Cobertura:** 50%" in text
        assert "## 📝 Análisis\nForma reconocible con esquinas redondeadas.\n" in text
        assert (
            "## ✅ Fortalezas\n"
            "- Tamaño adecuado\n"
            "- Figura cerrada\n"
        ) in text
        assert (
            "## ⚠️ Áreas de Mejora\n"
            "- Esquina superior abierta\n"
            "- Lado derecho inclinado\n"
            "- Trazo tembloroso\n"
        ) in text
        assert text.endswith(
            "## 💡 Sugerencias\n"
            "- Marcar las esquinas\n"
            "- Trazar más despacio\n"
        )
