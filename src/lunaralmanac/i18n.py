"""Simple two-language (ko/en) translation helper."""

_STRINGS: dict[str, dict[str, str]] = {
    "page_title": {
        "ko": "달의 위상 달력",
        "en": "Lunar Almanac",
    },
    "header_today": {
        "ko": "오늘의 달",
        "en": "Tonight's Moon",
    },
    "header_calendar": {
        "ko": "이번 달 달의 위상",
        "en": "Moon Phase Calendar",
    },
    "header_chart": {
        "ko": "앞으로 30일 밝기",
        "en": "Illumination, next 30 days",
    },
    "header_sun": {
        "ko": "태양 정보",
        "en": "Solar Information",
    },
    "header_moon": {
        "ko": "달 정보",
        "en": "Lunar Information",
    },
    "label_location": {
        "ko": "위치",
        "en": "Location",
    },
    "label_local_time": {
        "ko": "현지 시각",
        "en": "Local time",
    },
    "label_sunrise": {
        "ko": "일출",
        "en": "Sunrise",
    },
    "label_sunset": {
        "ko": "일몰",
        "en": "Sunset",
    },
    "label_solar_noon": {
        "ko": "남중",
        "en": "Solar noon",
    },
    "label_day_length": {
        "ko": "낮의 길이",
        "en": "Day length",
    },
    "label_moonrise": {
        "ko": "월출",
        "en": "Moonrise",
    },
    "label_moonset": {
        "ko": "월몰",
        "en": "Moonset",
    },
    "label_altitude": {
        "ko": "고도",
        "en": "Altitude",
    },
    "label_azimuth": {
        "ko": "방위각",
        "en": "Azimuth",
    },
    "label_distance": {
        "ko": "거리",
        "en": "Distance",
    },
    "label_illuminated": {
        "ko": "밝게 빛나는 비율 {percent}%",
        "en": "{percent}% illuminated",
    },
    "status_day": {
        "ko": "낮",
        "en": "Day",
    },
    "status_night": {
        "ko": "밤",
        "en": "Night",
    },
    "status_unknown": {
        "ko": "알 수 없음",
        "en": "Unknown",
    },
    "btn_refresh": {
        "ko": "↻ 새로고침",
        "en": "↻ Refresh",
    },
    "loading_fetch": {
        "ko": "✦ 하늘 정보를 불러오는 중",
        "en": "✦ Fetching sky data",
    },
    "error_fetch": {
        "ko": "하늘 정보를 불러오지 못했어요. 잠시 후 다시 시도해주세요. ({error})",
        "en": "Could not load sky data. Please try again shortly. ({error})",
    },
}


def t(key: str, lang: str) -> str:
    """Return the translated string for key in lang.

    Falls back to 'en', then to the key itself if not found.
    """
    entry = _STRINGS.get(key)
    if entry is None:
        return key
    return entry.get(lang) or entry.get("en") or key
