# /seatwise/main.py

import os
from dotenv import load_dotenv

# --- Core FastAPI Imports ---
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# --- Application-specific Router Imports ---
from .routers import seating_router, analysis_router

# --- Configuration ---
load_dotenv()
CORS_ORIGINS = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",")]

# --- FastAPI Application Instance Creation ---
app = FastAPI(
    title="Seatwise Backend API",
    description="Personality-aware classroom seating: AI-optimized charts with a deterministic fallback.",
    version="1.0.0"
)

# --- Middleware Configuration ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- API Router Inclusion ---
app.include_router(seating_router.router, prefix="/api/seating", tags=["Seating"])
app.include_router(analysis_router.router, prefix="/api/analysis", tags=["Student Analysis"])

# --- Root / Health Check Endpoint ---
@app.get("/", tags=["Health Check"])
async def read_root():
    """A simple health check endpoint to confirm the API is online."""
    return {"status": "Seatwise Backend is running!", "version": app.version}
