"""
Persona Questionnaire Schema

Question prompts, purposes and options served to the onboarding form.
Option values are exactly the answers the scorer understands.
"""

from typing import Any, Dict, List

from .scoring import QUESTION_WEIGHTS


QUESTIONS: List[Dict[str, Any]] = [
    {
        "id": "tracking_style",
        "form_id": "trackingStyle",
        "question": "How do you usually track your health goals?",
        "purpose": "Measures engagement and data-driven mindset",
        "options": [
            {"value": "detail-oriented", "label": "I log everything daily and check trends", "description": "Detail-oriented user"},
            {"value": "casual", "label": "I update occasionally when I remember", "description": "Casual user"},
            {"value": "quick-bold", "label": "I just want to see a summary without manual entry", "description": "Quick & bold user"},
            {"value": "tech-savvy", "label": "I rely on wearable devices to track automatically", "description": "Tech-savvy user"},
        ],
    },
    {
        "id": "motivation",
        "form_id": "motivation",
        "question": "What motivates you most to use this app?",
        "purpose": "Reveals emotional motivation and engagement style",
        "options": [
            {"value": "goal-focused", "label": "To improve my fitness and lifestyle", "description": "Goal-focused user"},
            {"value": "analytical", "label": "To understand my health data deeply", "description": "Analytical user"},
            {"value": "fast-action", "label": "To get quick insights and daily tips", "description": "Fast-action user"},
            {"value": "health-conscious", "label": "To manage a specific medical condition", "description": "Health-conscious user"},
        ],
    },
    {
        "id": "time_spent",
        "form_id": "timeSpent",
        "question": "How much time do you usually spend reviewing your health data?",
        "purpose": "Detects patience and depth of interaction",
        "options": [
            {"value": "fast-bold", "label": "Less than 2 minutes, I prefer quick highlights", "description": "Fast & bold user"},
            {"value": "balanced", "label": "Around 5-10 minutes, I review trends casually", "description": "Balanced user"},
            {"value": "detail-oriented", "label": "More than 10 minutes, I analyze data in detail", "description": "Detail-oriented user"},
            {"value": "passive", "label": "I rarely review it", "description": "Passive user (needs motivation UI)"},
        ],
    },
    {
        "id": "tech_comfort",
        "form_id": "techComfort",
        "question": "How comfortable are you with using technology or health devices?",
        "purpose": "Determines UI complexity and feature exposure",
        "options": [
            {"value": "beginner", "label": "I prefer simple interfaces, not too technical", "description": "Beginner user"},
            {"value": "intermediate", "label": "I'm okay exploring new features with guidance", "description": "Intermediate user"},
            {"value": "power", "label": "I love exploring advanced analytics and settings", "description": "Power user"},
        ],
    },
    {
        "id": "dashboard_preference",
        "form_id": "dashboardPreference",
        "question": "What kind of insights would you like to see first on your dashboard?",
        "purpose": "Helps tailor dashboard layout",
        "options": [
            {"value": "snapshot", "label": "My current health score or vitals summary", "description": "Snapshot/quick overview user"},
            {"value": "analytical", "label": "Detailed reports and trends", "description": "Analytical user"},
            {"value": "guided", "label": "Personalized goals and recommendations", "description": "Motivated, guided user"},
            {"value": "action-oriented", "label": "Reminders, tasks, or alerts", "description": "Action-oriented user"},
        ],
    },
]


def questionnaire_schema() -> Dict[str, Any]:
    """Questionnaire definition with per-question weights, for the frontend form."""
    return {
        "count": len(QUESTIONS),
        "questions": [
            {**question, "weight": QUESTION_WEIGHTS[question["id"]]}
            for question in QUESTIONS
        ],
    }
