"""
HealthLens Persona Engine

Questionnaire → persona → view family → adaptive lab-result content.

Version: persona_engine_v1
"""

__version__ = "1.0.0"
