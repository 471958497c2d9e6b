# /seatwise/services/gemini_service.py

import os
import json
from dotenv import load_dotenv
from typing import Dict, Optional
import google.generativeai as genai
from google.generativeai.types import GenerationConfig

# --- CONFIGURATION ---
load_dotenv()
API_KEY = os.getenv("GOOGLE_API_KEY")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")

_is_configured = False


def _get_model() -> genai.GenerativeModel:
    """
    Configures the SDK on first use. A missing key only fails the call that
    needs it, so the deterministic parts of the service keep working offline.
    """
    global _is_configured
    if not API_KEY:
        raise ValueError("GOOGLE_API_KEY environment variable is not set.")
    if not _is_configured:
        genai.configure(api_key=API_KEY)
        _is_configured = True
    return genai.GenerativeModel(GEMINI_MODEL)

def _log_token_usage(response, log_context: str) -> None:
    usage = getattr(response, 'usage_metadata', None)
    if not usage or not log_context:
        return
    prompt_tokens = getattr(usage, 'prompt_token_count', 0)
    completion_tokens = getattr(usage, 'candidates_token_count', 0)
    total_tokens = getattr(usage, 'total_token_count', 0)
    print(f"[TOKEN-USAGE] {log_context} - Prompt: {prompt_tokens}, Completion: {completion_tokens}, Total: {total_tokens}")


# --- CORE GENERATIVE FUNCTIONS ---

async def generate_text(
    prompt: str,
    temperature: float = 0.7,
    max_output_tokens: Optional[int] = None,
    log_context: str = ""
) -> str:
    """The workhorse for text-only, non-streaming tasks."""
    try:
        model = _get_model()
        config = GenerationConfig(temperature=temperature, max_output_tokens=max_output_tokens)
        response = await model.generate_content_async(prompt, generation_config=config)
        if not response.parts:
            raise ValueError("AI model returned an empty response.")
        _log_token_usage(response, log_context)
        return response.text
    except Exception as e:
        print(f"ERROR in generate_text with Gemini API: {e}")
        raise

async def generate_json(
    prompt: str,
    temperature: float = 0.3,
    max_output_tokens: Optional[int] = None,
    log_context: str = ""
) -> Dict:
    """
    Generates a response using the Gemini API's JSON Mode and parses it.
    The result is only guaranteed to be JSON; checking it against a response
    contract is the caller's job.

    Raises:
        json.JSONDecodeError: the model answered, but not with valid JSON.
        ValueError: the call itself failed (missing key, network, empty reply).
    """
    try:
        model = _get_model()
        config = GenerationConfig(
            temperature=temperature,
            max_output_tokens=max_output_tokens,
            response_mime_type="application/json"
        )
        response = await model.generate_content_async(prompt, generation_config=config)
        if not response.parts or not response.text:
            raise ValueError("AI model returned an empty response.")
        _log_token_usage(response, log_context)
        return json.loads(response.text)
    except json.JSONDecodeError as e:
        # Kept distinct so callers can tell a malformed payload from a failed call.
        print(f"ERROR in generate_json: AI response is not valid JSON: {e}")
        raise
    except Exception as e:
        print(f"ERROR in generate_json with Gemini API: {e}")
        raise ValueError(f"Failed to get a valid JSON response from the AI. Error: {e}")
