# -*- coding: utf-8 -*-
"""
Fixed diagnosis prompt and the multimodal request body sent to Gemini.
"""
from typing import Any, Dict

DIAGNOSIS_PROMPT = """
      You are Dr. Plant, an expert AI botanist. Analyze the following image of a plant.
      Your diagnosis should be clear, concise, and helpful for a home gardener.
      1.  **Status:** Start by stating if the plant appears healthy or diseased.
      2.  **Disease Identification:** If diseased, identify the most likely disease by its common name.
      3.  **Remedy/Treatment:** If diseased, provide a simple, step-by-step remedy.
      4.  **Formatting:** Structure your response in clean HTML.
          - Use a main heading: `<h3>Diagnosis Status</h3>` for the health status.
          - If diseased, add: `<h4>Suspected Disease</h4>` and `<h4>Recommended Remedy</h4>`.
          - Use paragraphs `<p>` for descriptions and lists `<ul><li>...</li></ul>` for remedy steps.
      If the image is unclear or not a plant, state that you cannot provide a diagnosis and ask for a clearer picture.
    """


def build_payload(image: str, mime_type: str) -> Dict[str, Any]:
    """Build a generateContent body (inputs: base64 image/mimeType; output: JSON dict)."""
    # Prompt first, image second, both in a single user turn.
    return {
        "contents": [
            {
                "role": "user",
                "parts": [
                    {"text": DIAGNOSIS_PROMPT},
                    {"inlineData": {"mimeType": mime_type, "data": image}},
                ],
            }
        ],
    }
