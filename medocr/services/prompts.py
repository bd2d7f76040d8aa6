# medocr/services/prompts.py

MEDICATION_PROMPT = """
You are helping a patient understand a prescription.

The following text comes from OCR of a handwritten or printed prescription.
It may be messy or inaccurate.

Write a clear, patient-friendly explanation that covers:
- What medication(s) this appears to be
- How the patient should take it (if stated)
- What is unclear or should be confirmed with a pharmacist or doctor

Do NOT invent details that are not present.
Write in plain English for a non-medical audience.

OCR TEXT:
\"\"\"{ocr_text}\"\"\"
"""


def build_medication_prompt(ocr_text: str) -> str:
    """Embed the (already trimmed) OCR text verbatim in the explainer prompt."""
    return MEDICATION_PROMPT.format(ocr_text=ocr_text).strip()
