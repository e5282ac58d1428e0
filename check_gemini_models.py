"""
List the Gemini models available to the configured API key and check that the
configured GEMINI_MODEL is one of them.
Run with: python check_gemini_models.py
"""

import sys

import google.generativeai as genai
from dotenv import load_dotenv

# Load .env before settings are read
load_dotenv()

from app.config import settings  # noqa: E402


def check_available_models() -> bool:
    print("=" * 70)
    print("Checking Available Gemini Models")
    print("=" * 70)

    api_key = settings.GEMINI_API_KEY
    if not api_key:
        print("❌ ERROR: GEMINI_API_KEY is not set")
        print("   Add it to .env: GEMINI_API_KEY=your_key_here")
        return False

    print(f"✓ API key found (length: {len(api_key)})")

    try:
        genai.configure(api_key=api_key)
        generation_models = [
            model.name.replace("models/", "")
            for model in genai.list_models()
            if "generateContent" in model.supported_generation_methods
        ]
    except Exception as e:
        print(f"\n❌ Error: {str(e)}")
        print("   Check the API key and network access to the Gemini API")
        return False

    if not generation_models:
        print("❌ No models support generateContent for this key")
        return False

    print(f"✅ {len(generation_models)} models support generateContent:\n")
    for name in sorted(generation_models):
        marker = "⭐" if name == settings.GEMINI_MODEL else "•"
        print(f"   {marker} {name}")

    print()
    if settings.GEMINI_MODEL in generation_models:
        print(f"✅ Configured model '{settings.GEMINI_MODEL}' is available")
        return True

    print(f"⚠️  Configured model '{settings.GEMINI_MODEL}' is not in the list")
    print("   Set GEMINI_MODEL to one of the models above")
    return False


if __name__ == "__main__":
    success = check_available_models()
    sys.exit(0 if success else 1)
