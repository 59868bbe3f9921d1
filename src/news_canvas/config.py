import os
from dotenv import load_dotenv

load_dotenv()

# Gemini API Configuration (API_KEY kept for setups that export the generic name)
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY", "")

# Models
TEXT_MODEL = os.getenv("NEWS_CANVAS_TEXT_MODEL", "gemini-3-flash-preview")  # headlines + prompts
IMAGE_MODEL = os.getenv("NEWS_CANVAS_IMAGE_MODEL", "gemini-3-pro-image-preview")  # generate + edit
VIDEO_MODEL = os.getenv("NEWS_CANVAS_VIDEO_MODEL", "veo-3.1-fast-generate-preview")

# Image / Video Configuration
IMAGE_ASPECT_RATIO = "16:9"
IMAGE_SIZE = "1K"
VIDEO_RESOLUTION = "720p"
VIDEO_POLL_SECONDS = float(os.getenv("NEWS_CANVAS_VIDEO_POLL_SECONDS", "10"))

# News Configuration
# The headline instruction is built from these; defaults target Taiwanese readers aged 40-55
NEWS_REGION = os.getenv("NEWS_CANVAS_REGION", "Taiwan")
NEWS_AUDIENCE = os.getenv("NEWS_CANVAS_AUDIENCE", "men and women aged 40 to 55")
NEWS_LANGUAGE = os.getenv("NEWS_CANVAS_NEWS_LANGUAGE", "Traditional Chinese")
NEWS_COUNT = int(os.getenv("NEWS_CANVAS_NEWS_COUNT", "10"))

# Locale for user-facing messages: "zh-TW" or "en"
LOCALE = os.getenv("NEWS_CANVAS_LOCALE", "zh-TW")

# Output directories (created on first write)
OUTPUT_DIR = os.getenv("NEWS_CANVAS_OUTPUT_DIR", "output")
TEMP_DIR = os.getenv("NEWS_CANVAS_TEMP_DIR", "temp")
