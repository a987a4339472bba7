"""
Prompt template for the LLM discrepancy analysis.
"""

from typing import Any, Dict, Mapping, Optional

PROMPT_TEMPLATE = """Analyze the discrepancy between the ground truth bounding box and the XAI-generated bounding box for the given coordinates.

Context:
- XAI Technique: {xai_technique}
- Model Architecture: {model_architecture}
- Dataset: {dataset}

Ground Truth Bounding Box: ({gt_x1}, {gt_y1}) to ({gt_x2}, {gt_y2})
XAI Generated Bounding Box: ({xai_x1}, {xai_y1}) to ({xai_x2}, {xai_y2})

Please provide a comprehensive analysis covering:

1. **Quantitative Analysis:**
   - Calculate IoU (Intersection over Union) between the bounding boxes
   - Measure the center point distance
   - Analyze the area difference

2. **Qualitative Analysis:**
   - Identify potential reasons for the discrepancy
   - Consider the limitations of the specific XAI technique
   - Evaluate the impact of model architecture on XAI performance

3. **Technical Factors:**
   - How the XAI technique works and its inherent limitations
   - Model-specific considerations (ResNet-50 vs U-Net)
   - Dataset characteristics that might affect XAI performance

4. **Recommendations:**
   - Suggest improvements for better XAI performance
   - Alternative XAI techniques that might work better
   - Model architecture modifications if applicable

5. **Research Insights:**
   - Relate findings to existing literature on XAI limitations
   - Discuss the trade-off between model performance and explainability

Please provide specific, actionable insights that can help improve the XAI technique's alignment with ground truth annotations."""

# Shown in place of values the user has not filled in yet
PLACEHOLDERS: Dict[str, str] = {
    "xai_technique": "[XAI_TECHNIQUE]",
    "model_architecture": "[MODEL_ARCHITECTURE]",
    "dataset": "[DATASET]",
    "gt_x1": "[GT_X1]",
    "gt_y1": "[GT_Y1]",
    "gt_x2": "[GT_X2]",
    "gt_y2": "[GT_Y2]",
    "xai_x1": "[XAI_X1]",
    "xai_y1": "[XAI_Y1]",
    "xai_x2": "[XAI_X2]",
    "xai_y2": "[XAI_Y2]",
}


def load_template(values: Optional[Mapping[str, Any]] = None) -> str:
    """
    Fill the prompt template with the current form values.

    Args:
        values: Raw form values keyed by field name; missing or empty
            values are shown as bracketed placeholders

    Returns:
        Prompt text
    """
    values = values or {}
    filled = {}
    for key, placeholder in PLACEHOLDERS.items():
        value = values.get(key)
        filled[key] = placeholder if value is None or str(value) == "" else str(value)
    return PROMPT_TEMPLATE.format(**filled)
