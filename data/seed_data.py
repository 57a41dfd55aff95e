"""Built-in sample data used on first run or when the store cannot be read."""
from __future__ import annotations

from typing import Dict, List, Any

SEED_CATEGORIES: List[Dict[str, str]] = [
    {"name": "Writing", "color": "#FF6B6B"},
    {"name": "Coding", "color": "#4ECDC4"},
    {"name": "Analysis", "color": "#45B7D1"},
]

SEED_PROMPTS: List[Dict[str, Any]] = [
    {
        "title": "Creative Writing Starter",
        "content": (
            "Write a creative story about [TOPIC]. Include:\n"
            "- Compelling characters\n"
            "- An engaging plot\n"
            "- Vivid descriptions\n"
            "- A satisfying conclusion\n\n"
            "Style: [STYLE]\n"
            "Length: [LENGTH]"
        ),
        "tags": ["creative", "storytelling", "fiction"],
        "category": "Writing",
    },
    {
        "title": "Code Review Assistant",
        "content": (
            "Please review the following code and provide feedback on:\n\n"
            "1. Code quality and readability\n"
            "2. Performance optimizations\n"
            "3. Security considerations\n"
            "4. Best practices\n"
            "5. Potential bugs or issues\n\n"
            "```\n[CODE_HERE]\n```"
        ),
        "tags": ["code-review", "development", "best-practices"],
        "category": "Coding",
    },
    {
        "title": "Data Analysis Helper",
        "content": (
            "Analyze the following data and provide insights:\n\n"
            "**Data:** [DATASET]\n\n"
            "**Analysis Requirements:**\n"
            "- Key trends and patterns\n"
            "- Statistical summaries\n"
            "- Potential correlations\n"
            "- Recommendations\n"
            "- Visualizations suggestions\n\n"
            "**Context:** [BUSINESS_CONTEXT]"
        ),
        "tags": ["data", "analysis", "insights", "statistics"],
        "category": "Analysis",
    },
    {
        "title": "Meeting Summary Template",
        "content": (
            "**Meeting Summary**\n\n"
            "**Date:** [DATE]\n"
            "**Attendees:** [ATTENDEES]\n"
            "**Purpose:** [PURPOSE]\n\n"
            "**Key Discussion Points:**\n"
            "- [POINT_1]\n- [POINT_2]\n- [POINT_3]\n\n"
            "**Decisions Made:**\n"
            "- [DECISION_1]\n- [DECISION_2]\n\n"
            "**Action Items:**\n"
            "- [ ] [ACTION_1] - Due: [DATE] - Owner: [PERSON]\n"
            "- [ ] [ACTION_2] - Due: [DATE] - Owner: [PERSON]\n\n"
            "**Next Steps:**\n[NEXT_STEPS]"
        ),
        "tags": ["meeting", "summary", "template", "productivity"],
        "category": None,
    },
]
