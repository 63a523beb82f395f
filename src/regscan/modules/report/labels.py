"""User-facing report strings per locale."""

from regscan.standards.database import FALLBACK_LOCALE

LABELS: dict[str, dict[str, str]] = {
    "en": {
        "title": "Accessibility report for {url}",
        "score": "Compliance score",
        "status": "Status",
        "pass": "PASS",
        "fail": "FAIL",
        "scanned_at": "Scanned",
        "viewport": "Viewport",
        "critical": "Critical",
        "high": "High",
        "medium": "Medium",
        "low": "Low",
        "total": "Total issues",
        "findings": "Findings",
        "no_findings": "No accessibility violations were detected.",
        "wcag": "WCAG",
        "en301549": "EN 301 549",
        "national_law": "National law",
        "remediation": "Remediation",
        "component": "Recommended component",
        "affected": "Affected elements",
        "more_nodes": "...and {count} more",
        "structural": "Structural issues",
        "manual_check": "Requires manual verification",
        "risk": "Risk",
        "impact": "Impact",
    },
    "sv": {
        "title": "Tillgänglighetsrapport för {url}",
        "score": "Efterlevnadspoäng",
        "status": "Status",
        "pass": "GODKÄND",
        "fail": "UNDERKÄND",
        "scanned_at": "Skannad",
        "viewport": "Visningsyta",
        "critical": "Kritisk",
        "high": "Hög",
        "medium": "Medel",
        "low": "Låg",
        "total": "Totalt antal problem",
        "findings": "Resultat",
        "no_findings": "Inga tillgänglighetsbrister hittades.",
        "wcag": "WCAG",
        "en301549": "EN 301 549",
        "national_law": "Svensk lag",
        "remediation": "Åtgärd",
        "component": "Rekommenderad komponent",
        "affected": "Berörda element",
        "more_nodes": "...och {count} till",
        "structural": "Strukturella problem",
        "manual_check": "Kräver manuell kontroll",
        "risk": "Risk",
        "impact": "Påverkan",
    },
    "de": {
        "title": "Barrierefreiheitsbericht für {url}",
        "score": "Konformitätswert",
        "status": "Status",
        "pass": "BESTANDEN",
        "fail": "NICHT BESTANDEN",
        "scanned_at": "Geprüft",
        "viewport": "Viewport",
        "critical": "Kritisch",
        "high": "Hoch",
        "medium": "Mittel",
        "low": "Niedrig",
        "total": "Probleme gesamt",
        "findings": "Befunde",
        "no_findings": "Es wurden keine Barrierefreiheitsmängel gefunden.",
        "wcag": "WCAG",
        "en301549": "EN 301 549",
        "national_law": "Nationales Recht",
        "remediation": "Behebung",
        "component": "Empfohlene Komponente",
        "affected": "Betroffene Elemente",
        "more_nodes": "...und {count} weitere",
        "structural": "Strukturelle Probleme",
        "manual_check": "Manuelle Prüfung erforderlich",
        "risk": "Risiko",
        "impact": "Auswirkung",
    },
    "fr": {
        "title": "Rapport d'accessibilité pour {url}",
        "score": "Score de conformité",
        "status": "Statut",
        "pass": "CONFORME",
        "fail": "NON CONFORME",
        "scanned_at": "Analysé",
        "viewport": "Fenêtre",
        "critical": "Critique",
        "high": "Élevé",
        "medium": "Moyen",
        "low": "Faible",
        "total": "Total des problèmes",
        "findings": "Constats",
        "no_findings": "Aucun défaut d'accessibilité détecté.",
        "wcag": "WCAG",
        "en301549": "EN 301 549",
        "national_law": "Droit national",
        "remediation": "Correction",
        "component": "Composant recommandé",
        "affected": "Éléments concernés",
        "more_nodes": "...et {count} de plus",
        "structural": "Problèmes structurels",
        "manual_check": "Vérification manuelle requise",
        "risk": "Risque",
        "impact": "Impact",
    },
    "es": {
        "title": "Informe de accesibilidad de {url}",
        "score": "Puntuación de cumplimiento",
        "status": "Estado",
        "pass": "CUMPLE",
        "fail": "NO CUMPLE",
        "scanned_at": "Analizado",
        "viewport": "Ventana",
        "critical": "Crítico",
        "high": "Alto",
        "medium": "Medio",
        "low": "Bajo",
        "total": "Total de problemas",
        "findings": "Hallazgos",
        "no_findings": "No se detectaron problemas de accesibilidad.",
        "wcag": "WCAG",
        "en301549": "EN 301 549",
        "national_law": "Ley nacional",
        "remediation": "Corrección",
        "component": "Componente recomendado",
        "affected": "Elementos afectados",
        "more_nodes": "...y {count} más",
        "structural": "Problemas estructurales",
        "manual_check": "Requiere verificación manual",
        "risk": "Riesgo",
        "impact": "Impacto",
    },
}


def label(key: str, locale: str, **params: object) -> str:
    """Look up ``key`` for ``locale``, falling back to English, then to the key."""
    table = LABELS.get(locale) or LABELS[FALLBACK_LOCALE]
    text = table.get(key) or LABELS[FALLBACK_LOCALE].get(key, key)
    return text.format(**params) if params else text
