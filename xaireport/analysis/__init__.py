"""Analysis components: prompt template and the analysis service."""

from .prompt import load_template
from .service import AnalysisService

__all__ = ["load_template", "AnalysisService"]
