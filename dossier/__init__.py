"""
DOSSIER - Application summary documents for submitted job applications

Accepts an application form with an optional PDF resume and produces a summary
PDF that combines the applicant's text with the pages of the uploaded document.

Architecture:
- Intake Context: Form and upload validation, submission lifecycle
- Rendering Context: Text layout, page composition, resume merging, PDF output
"""

__version__ = "0.1.0"
