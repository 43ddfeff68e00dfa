import logging
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded

from rentease_bot.config import settings
from rentease_bot.api.endpoints import chatbot
from rentease_bot.core.rate_limit import limiter, rate_limit_exceeded_handler

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)

# Initialize the App
app = FastAPI(
    title="RentEase Chatbot API",
    description="Conversational property search: turns chat messages into search filters",
    version="1.0.0",
    debug=settings.DEBUG
)

# --- CORS MIDDLEWARE ---
# The Browse Properties page calls this API from the browser
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- RATE LIMITING ---
# Per-IP cap on chat turns; over-limit requests get a JSON 429
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

# --- ROUTER REGISTRATION ---
# Resulting URL: http://localhost:8000/api/v1/chatbot
app.include_router(
    chatbot.router,
    prefix="/api/v1",
    tags=["Chatbot"]
)

# --- ROOT ENDPOINT ---
@app.get("/")
async def health_check():
    return {
        "status": "active",
        "service": "RentEase Chatbot API",
        "version": "1.0.0"
    }

# --- ENTRY POINT ---
# Allows you to run: python -m rentease_bot.main
if __name__ == "__main__":
    uvicorn.run("rentease_bot.main:app", host="0.0.0.0", port=8000, reload=settings.DEBUG)
