"""
Fallback rule configuration
Keyword rules used when the completion API fails
"""
from datetime import datetime
from typing import Dict, List, Optional, Any


# Categories served by the info service, checked in this order.
# A category matches when any "keywords" entry and every "required" entry
# occur in the lowercased utterance.
INFO_CATEGORIES: Dict[str, Dict[str, Any]] = {
    "weather": {
        "keywords": ["weather"],
        "required": [],
        "path": "weather",
        "fallback": "It's currently 72°F and sunny in your area.",
        "description": "Current weather conditions"
    },
    "news": {
        "keywords": ["news"],
        "required": [],
        "path": "news",
        "fallback": "I can't reach the news feed right now. Please check back in a moment for the latest headlines.",
        "description": "Latest headlines"
    },
    "employment": {
        "keywords": ["employment", "job"],
        "required": [],
        "path": "employment",
        "fallback": "Employment figures are unavailable right now. The job market has been steady across most sectors.",
        "description": "Employment and job market figures"
    },
    "market": {
        "keywords": ["market", "stock"],
        "required": [],
        "path": "market",
        "fallback": "Market data is unavailable right now. Please try again shortly for the latest index movements.",
        "description": "Stock market summary"
    },
    "projects": {
        "keywords": ["brenin"],
        "required": ["project"],
        "path": "brenin_projects",
        "fallback": "Brenin Technologies is currently working on its Digital Human AI platform and enterprise AI solutions.",
        "description": "Brenin Technologies projects"
    },
}

# Local matcher rules, first match wins
LOCAL_RULES: List[Dict[str, Any]] = [
    {
        "category": "greeting",
        "triggers": ["hello", "hi"],
        "reply": "Hello there! How can I assist you today?"
    },
    {
        "category": "well_being",
        "triggers": ["how are you"],
        "reply": "I'm functioning well, thank you for asking! How about you?"
    },
    {
        "category": "weather",
        "triggers": ["weather"],
        "reply": "It's currently 72°F and sunny in your area."
    },
    {
        "category": "time",
        "triggers": ["time"],
        "reply": "The current time is {time}."
    },
    {
        "category": "thanks",
        "triggers": ["thank"],
        "reply": "You're welcome! Is there anything else I can help you with?"
    },
    {
        "category": "capability",
        "triggers": ["what can you do", "help"],
        "reply": (
            "I can help you with general questions, provide information about time and weather, "
            "assist with file-related queries, and have conversations. Feel free to upload files "
            "using the + button and ask me about them!"
        )
    },
    {
        "category": "file",
        "triggers": ["file", "upload"],
        "reply": (
            "You can upload files by clicking the + button next to the input field. I can help you "
            "with information about different file types and general file management questions."
        )
    },
    {
        "category": "identity",
        "triggers": ["brenin"],
        "reply": (
            "I'm Brenin AI, your digital human assistant. I'm here to help you with various tasks "
            "and answer your questions. What would you like to know?"
        )
    },
]

# Reply when no local rule matches
DEFAULT_REPLY: str = "That's interesting. Tell me more about that or ask me something else."


def get_info_category(user_input: str) -> Optional[str]:
    """
    Find the info service category an utterance should be routed to

    Args:
        user_input: user utterance

    Returns:
        category name, or None when no category matches
    """
    if not user_input or not user_input.strip():
        return None

    user_input_lower = user_input.lower()

    for category, config in INFO_CATEGORIES.items():
        keywords = config.get("keywords", [])
        required = config.get("required", [])
        if any(keyword in user_input_lower for keyword in keywords) and all(
            word in user_input_lower for word in required
        ):
            return category

    return None


def get_category_fallback(category: str) -> str:
    """
    Canned reply for an info category whose service call failed

    Args:
        category: info category name

    Returns:
        canned reply text
    """
    config = INFO_CATEGORIES.get(category.lower(), {})
    return config.get("fallback", DEFAULT_REPLY)


def match_local_rule(user_input: str) -> Optional[str]:
    """
    Return the category of the first local rule whose trigger occurs in the utterance

    Args:
        user_input: user utterance

    Returns:
        rule category or None
    """
    user_input_lower = (user_input or "").lower()

    for rule in LOCAL_RULES:
        if any(trigger in user_input_lower for trigger in rule["triggers"]):
            return rule["category"]

    return None


def get_local_reply(user_input: str, now: Optional[datetime] = None) -> str:
    """
    Canned reply from the first matching local rule

    Args:
        user_input: user utterance
        now: current time used by the time rule (defaults to datetime.now())

    Returns:
        reply text, DEFAULT_REPLY when nothing matches
    """
    category = match_local_rule(user_input)
    if category is None:
        return DEFAULT_REPLY

    rule = next(rule for rule in LOCAL_RULES if rule["category"] == category)
    current = now or datetime.now()
    return rule["reply"].format(time=current.strftime("%I:%M:%S %p"))
