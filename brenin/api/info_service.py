"""
Info service: canned JSON for weather, news, employment, market and projects
"""
from datetime import datetime, timezone
from typing import Any, Dict
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from brenin.api.middleware import LoggingMiddleware
from brenin.utils.logger import setup_logging, get_logger

setup_logging()
logger = get_logger(__name__)

app = FastAPI(
    title="Brenin Info Service",
    description="Canned topic data consumed by the chat reply resolver",
    version="0.1.0"
)

app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])
app.add_middleware(LoggingMiddleware)


WEATHER: Dict[str, Any] = {
    "message": (
        "Current weather: 72°F (22°C), sunny with light clouds. Humidity: 45%, Wind: 8 mph "
        "from the west. UV Index: 6 (High). Perfect day for outdoor activities!"
    ),
    "temperature": 72,
    "condition": "sunny",
    "humidity": 45,
    "windSpeed": 8,
}

EMPLOYMENT: Dict[str, Any] = {
    "message": (
        "📊 Employment Update: Current rate at 95.8% (up 0.3% from last month). Tech sector "
        "leading with 12,000 new positions. Remote work opportunities increased by 25%. "
        "Job market remains robust across all sectors."
    ),
    "rate": 95.8,
    "trend": "increasing",
    "topSectors": ["Technology", "Healthcare", "Finance"],
}

MARKET: Dict[str, Any] = {
    "message": (
        "📈 Markets Today: S&P 500 +2.8%, NASDAQ +3.1%, DOW +2.2%. AI and clean energy stocks "
        "leading gains. Bitcoin at $45,200 (+4.2%). Strong earnings reports driving optimism."
    ),
    "sp500": "+2.8%",
    "nasdaq": "+3.1%",
    "dow": "+2.2%",
    "bitcoin": "$45,200 (+4.2%)",
}

PROJECTS: Dict[str, Any] = {
    "message": (
        "🚀 Brenin Technologies Current Projects:\n"
        "• Advanced Digital Human AI with DeepSeek integration\n"
        "• Real-time conversation processing\n"
        "• Multi-modal file handling system\n"
        "• Voice recognition & synthesis\n"
        "• Enterprise AI solutions\n"
        "• Next-gen chatbot frameworks"
    ),
    "projects": [
        "Digital Human AI Platform",
        "DeepSeek Integration",
        "Voice AI Systems",
        "Enterprise Solutions",
        "Multi-modal Processing",
    ],
    "status": "active_development",
}

CAPABILITIES: Dict[str, Any] = {
    "message": (
        "💡 My Capabilities:\n• Real-time information retrieval\n• Complex question answering\n"
        "• File processing & analysis\n• Multi-language support\n• Code assistance\n"
        "• Creative writing\n• Data analysis\n• Problem solving"
    ),
    "features": [
        "Information Retrieval",
        "Question Answering",
        "File Processing",
        "Multi-language Support",
        "Code Assistance",
        "Creative Writing",
        "Data Analysis",
    ],
}


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@app.get("/api/weather")
async def weather():
    return WEATHER


@app.get("/api/news")
async def news():
    return {
        "message": (
            "🔥 Breaking: Scientists achieve breakthrough in quantum computing, potentially "
            "revolutionizing AI processing speeds by 1000x. Tech stocks surge as major companies "
            "announce quantum partnerships."
        ),
        "category": "technology",
        "timestamp": _now(),
    }


@app.get("/api/employment")
async def employment():
    return EMPLOYMENT


@app.get("/api/market")
async def market():
    return MARKET


@app.get("/api/brenin_projects")
async def brenin_projects():
    return PROJECTS


@app.get("/api/ai-status")
async def ai_status():
    return {
        "message": (
            "🤖 Brenin AI Status: All systems operational. DeepSeek integration active. "
            "Processing speed: optimal. Ready to assist with any queries!"
        ),
        "status": "operational",
        "uptime": "99.9%",
        "lastUpdate": _now(),
    }


@app.get("/api/capabilities")
async def capabilities():
    return CAPABILITIES


@app.get("/health")
async def health():
    return {
        "status": "healthy",
        "timestamp": _now(),
        "server": "Brenin Digital Human Backend",
    }
