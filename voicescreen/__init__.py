"""
Voice Biomarker Screening

Simulated voice-biomarker risk assessment served over HTTP.
"""
__version__ = "1.0.0"
