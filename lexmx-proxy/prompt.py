"""
Prompt templates for the legal assistant.

The front-end selects a tool by sending one of the trigger prefixes below at
the start of the query. These strings are part of the public contract: they
are matched literally and case-sensitively, so they must not be reworded.
"""
from enum import Enum


class QueryKind(Enum):
    JURISPRUDENCE_LOOKUP = "jurisprudence_lookup"
    SWOT_ANALYSIS        = "swot_analysis"
    DOCUMENT_DRAFT       = "document_draft"
    GENERIC              = "generic"


JURISPRUDENCE_PREFIX = "Busca jurisprudencia de la SCJN sobre:"
SWOT_PREFIX          = "Realiza un análisis de estrategia legal tipo FODA para el siguiente caso:"
DOCUMENT_PREFIX      = "Redacta un borrador de documento legal:"

# Checked in order, first match wins.
TRIGGER_PREFIXES = (
    (JURISPRUDENCE_PREFIX, QueryKind.JURISPRUDENCE_LOOKUP),
    (SWOT_PREFIX,          QueryKind.SWOT_ANALYSIS),
    (DOCUMENT_PREFIX,      QueryKind.DOCUMENT_DRAFT),
)

DRAFTING_JURISDICTION = "Ciudad de México"

MISSING_CONTEXT = "No proporcionado"

JURISPRUDENCE_TEMPLATE = """Actúa como un experto en jurisprudencia mexicana, con dominio de las tesis y criterios publicados en el Semanario Judicial de la Federación.

Localiza la jurisprudencia o tesis aislada más relevante para la consulta y entrega un resumen estructurado con los siguientes apartados:

1. Número de registro digital
2. Fecha de publicación
3. Hechos relevantes
4. Criterio jurídico
5. Impacto práctico

Si no tienes certeza sobre un número de registro o una fecha, indícalo expresamente en lugar de inventarlo.

{query}"""

SWOT_TEMPLATE = """Actúa como un estratega legal con amplia experiencia en litigio en México.

Elabora un análisis FODA (Fortalezas, Oportunidades, Debilidades y Amenazas) del caso descrito abajo.

REGLAS:
- Fundamenta cada punto citando los artículos concretos de la ley aplicable.
- Usa las cifras del caso (montos, plazos, fechas, porcentajes) para cuantificar riesgos y beneficios.
- Cierra con una recomendación estratégica de no más de tres líneas.

Descripción del caso:
{context}"""

DOCUMENT_TEMPLATE = """Actúa como un redactor legal senior de un despacho mexicano.

Redacta un borrador completo y listo para revisión del documento solicitado. Si es un contrato, incluye proemio, declaraciones y cláusulas numeradas. Si es un escrito judicial, incluye rubro, proemio, hechos, consideraciones de derecho y puntos petitorios.

Adapta todas las referencias legales a la legislación aplicable en {jurisdiction}. Deja entre corchetes los datos que el cliente deba completar.

Solicitud:
{query}

Detalles del caso:
{context}"""

GENERIC_TEMPLATE = "Responde a la siguiente pregunta de forma concisa: {query}"


def classify_query(query: str) -> QueryKind:
    """Pick the template for a query by its literal prefix."""
    for prefix, kind in TRIGGER_PREFIXES:
        if query.startswith(prefix):
            return kind
    return QueryKind.GENERIC


def build_prompt(kind: QueryKind, query: str, context: str = "") -> str:
    case_context = context or MISSING_CONTEXT

    if kind is QueryKind.JURISPRUDENCE_LOOKUP:
        return JURISPRUDENCE_TEMPLATE.format(query=query)
    if kind is QueryKind.SWOT_ANALYSIS:
        return SWOT_TEMPLATE.format(context=case_context)
    if kind is QueryKind.DOCUMENT_DRAFT:
        return DOCUMENT_TEMPLATE.format(
            jurisdiction=DRAFTING_JURISDICTION,
            query=query,
            context=case_context,
        )
    return GENERIC_TEMPLATE.format(query=query)
