"""
User-facing messages, one catalog per locale.
Adapters and the workflow only ever show text looked up here.
"""

from typing import Optional

from news_canvas import config

MESSAGES = {
    "zh-TW": {
        "news_fetch_failed": "無法獲取新聞頭條。請確認網路連線或 API 狀態。",
        "no_news_found": "抱歉，AI 目前找不到相關的即時新聞，請稍後再試一次。",
        "prompt_failed": "無法生成圖片提示詞。",
        "image_failed": "無法生成圖片。請檢查金鑰權限或稍後再試。",
        "image_missing": "API 回傳中找不到圖片數據。",
        "video_failed": "無法生成影片。請確認金鑰權限與配額。",
        "edit_failed": "無法修改圖片。",
        "edit_missing": "無法獲取修改後的圖片數據。",
        "content_blocked": "修改指令因內容安全政策被拒絕，請換個說法再試一次。",
        "access_denied": "出圖權限遭拒。請確認已設定 GEMINI_API_KEY，且金鑰屬於付費項目（Paid Project）。",
        "unknown_error": "發生未知錯誤",
    },
    "en": {
        "news_fetch_failed": "Could not fetch news headlines. Check your connection or the API status.",
        "no_news_found": "Sorry, the AI could not find any current news right now. Please try again later.",
        "prompt_failed": "Could not generate image prompts.",
        "image_failed": "Could not generate the image. Check your key permissions or try again later.",
        "image_missing": "No image data found in the API response.",
        "video_failed": "Could not generate the video. Check your key permissions and quota.",
        "edit_failed": "Could not edit the image.",
        "edit_missing": "No edited image data returned.",
        "content_blocked": "The edit instruction was rejected by the content safety policy. Try rephrasing it.",
        "access_denied": "Access denied. Set GEMINI_API_KEY and make sure the key belongs to a paid project.",
        "unknown_error": "An unknown error occurred",
    },
}

DEFAULT_LOCALE = "zh-TW"


def get_message(key: str, locale: Optional[str] = None) -> str:
    """Look up `key` for `locale` (config.LOCALE by default), falling back to zh-TW."""
    catalog = MESSAGES.get(locale or config.LOCALE) or MESSAGES[DEFAULT_LOCALE]
    return catalog.get(key) or MESSAGES[DEFAULT_LOCALE].get(key, key)
