"""Lunar Almanac: Streamlit app for moon phases and real-time sun/moon data."""

import datetime
import html

import streamlit as st
import streamlit.components.v1 as components
from dotenv import load_dotenv
from streamlit_js_eval import get_geolocation, streamlit_js_eval

load_dotenv()

from lunaralmanac.client import (  # noqa: E402
    AstronomyClient,
    AstronomyFetchError,
    coordinates_from_position,
    fetch_with_fallback,
)
from lunaralmanac.display import (  # noqa: E402
    format_degrees,
    format_moon_distance,
    format_sun_distance,
    format_time,
    phase_icon,
    sun_status,
)
from lunaralmanac.i18n import t  # noqa: E402
from lunaralmanac.moonphase import current_phase, month_calendar, phase_window  # noqa: E402
from lunaralmanac.renderers.plotly_2d import render_illumination_chart  # noqa: E402
from lunaralmanac.renderers.svg_moon import (  # noqa: E402
    render_calendar_html,
    render_moon_svg,
)

# --- Language detection (browser-first via streamlit-js-eval) ---
# navigator.language is read once and cached in session_state.
# On the first run the JS call returns None; the rerun triggered by
# streamlit_js_eval fills it in.
if "lang" not in st.session_state:
    _browser_lang: str | None = streamlit_js_eval(
        js_expressions="navigator.language", key="_lang_detect", height=0
    )
    if _browser_lang is not None:
        st.session_state.lang = "ko" if _browser_lang.lower().startswith("ko") else "en"

_lang: str = st.session_state.get("lang", "en")

st.set_page_config(
    page_title=t("page_title", _lang),
    page_icon="🌙",
    layout="wide",
    initial_sidebar_state="collapsed",
)

# --- Session state initialization ---

if "astronomy" not in st.session_state:
    st.session_state.astronomy = None
if "error_msg" not in st.session_state:
    st.session_state.error_msg = None
if "fetched" not in st.session_state:
    st.session_state.fetched = False
if "coords" not in st.session_state:
    st.session_state.coords = None

# --- Dark theme CSS ---
st.markdown(
    """
    <style>
    /* Hide streamlit_js_eval invisible iframe */
    iframe[src*="streamlit_js_eval"] { display: none !important; }
    html, body, [data-testid="stAppViewContainer"], [data-testid="stMain"] {
        background-color: #0d1b35 !important;
        color: #e8e0cc !important;
    }
    [data-testid="stHeader"], [data-testid="stToolbar"] {
        display: none !important;
    }
    .panel-row {
        display: flex;
        justify-content: space-between;
        padding: 0.2rem 0;
        border-bottom: 1px solid rgba(201,169,110,0.12);
    }
    .panel-value { color: #c9a96e; }
    .error-box {
        color: #f0b0a0;
        border: 1px solid rgba(240,176,160,0.4);
        border-radius: 6px;
        padding: 0.6rem 1rem;
    }
    </style>
    """,
    unsafe_allow_html=True,
)


def _row(label: str, value: str) -> str:
    return (
        f'<div class="panel-row"><span>{html.escape(label)}</span>'
        f'<span class="panel-value">{html.escape(value)}</span></div>'
    )


# --- Browser geolocation (cached like navigator.language) ---
# get_geolocation() returns None until the browser answers; the component must
# be rendered on every run until then so its reply is not dropped. The first
# real position triggers one re-fetch by coordinates.
if st.session_state.coords is None:
    _coords = coordinates_from_position(get_geolocation())
    if _coords is not None:
        st.session_state.coords = _coords
        st.session_state.fetched = False


def _fetch_astronomy() -> None:
    """Fetch sun/moon data for the cached browser location, falling back to IP lookup."""
    lat, lng = st.session_state.coords or (None, None)
    st.session_state.error_msg = None
    try:
        st.session_state.astronomy = fetch_with_fallback(
            AstronomyClient.from_env(), lat=lat, lng=lng
        )
    except AstronomyFetchError as e:
        st.session_state.error_msg = t("error_fetch", _lang).format(
            error=html.escape(str(e))
        )
    st.session_state.fetched = True


# --- Moon phase (computed locally, no API key needed) ---

today = datetime.date.today()
tonight = current_phase(today)

col_today, col_calendar = st.columns([1, 2])
with col_today:
    st.subheader(t("header_today", _lang))
    st.markdown(render_moon_svg(tonight, size=140), unsafe_allow_html=True)
    st.markdown(f"### {phase_icon(tonight.phase_name)} {tonight.phase_name}")
    st.caption(
        t("label_illuminated", _lang).format(
            percent=round(tonight.illumination * 100)
        )
    )
with col_calendar:
    st.subheader(t("header_calendar", _lang))
    components.html(
        render_calendar_html(month_calendar(today.year, today.month), today=today),
        height=420,
        scrolling=False,
    )

st.subheader(t("header_chart", _lang))
st.plotly_chart(
    render_illumination_chart(phase_window(today), today_index=0),
    use_container_width=True,
    config={"displayModeBar": False},
)

# --- Real-time sun/moon panel ---

if not st.session_state.fetched:
    with st.spinner(t("loading_fetch", _lang)):
        _fetch_astronomy()

if st.button(t("btn_refresh", _lang), key="refresh_btn"):
    with st.spinner(t("loading_fetch", _lang)):
        _fetch_astronomy()

if st.session_state.error_msg:
    st.markdown(
        f'<div class="error-box">{st.session_state.error_msg}</div>',
        unsafe_allow_html=True,
    )

record = st.session_state.astronomy
if record is not None:
    loc = record.location
    place = ", ".join(p for p in [loc.city, loc.region, loc.country] if p)
    st.markdown(
        _row(t("label_location", _lang), place)
        + _row(
            "",
            f"{loc.coordinates.lat:.4f}°, {loc.coordinates.lng:.4f}°",
        )
        + _row(
            t("label_local_time", _lang), format_time(record.timestamp.current_time)
        ),
        unsafe_allow_html=True,
    )

    status = sun_status(
        record.sun.sunrise, record.sun.sunset, record.timestamp.current_time
    )
    status_key = {"Day": "status_day", "Night": "status_night"}.get(
        status, "status_unknown"
    )

    col_sun, col_moon = st.columns(2)
    with col_sun:
        st.subheader(f"☀ {t('header_sun', _lang)} · {t(status_key, _lang)}")
        st.markdown(
            _row(t("label_sunrise", _lang), format_time(record.sun.sunrise))
            + _row(t("label_sunset", _lang), format_time(record.sun.sunset))
            + _row(t("label_solar_noon", _lang), format_time(record.sun.solar_noon))
            + _row(t("label_day_length", _lang), format_time(record.sun.day_length))
            + _row(t("label_altitude", _lang), format_degrees(record.sun.altitude))
            + _row(t("label_azimuth", _lang), format_degrees(record.sun.azimuth))
            + _row(t("label_distance", _lang), format_sun_distance(record.sun.distance)),
            unsafe_allow_html=True,
        )
    with col_moon:
        st.subheader(f"{phase_icon(record.moon.phase)} {t('header_moon', _lang)}")
        st.markdown(
            f"**{html.escape(record.moon.phase)}** · "
            + t("label_illuminated", _lang).format(
                percent=f"{record.moon.illumination:.1f}"
            )
        )
        st.markdown(
            _row(t("label_moonrise", _lang), format_time(record.moon.moonrise))
            + _row(t("label_moonset", _lang), format_time(record.moon.moonset))
            + _row(t("label_altitude", _lang), format_degrees(record.moon.altitude))
            + _row(t("label_azimuth", _lang), format_degrees(record.moon.azimuth))
            + _row(
                t("label_distance", _lang), format_moon_distance(record.moon.distance)
            ),
            unsafe_allow_html=True,
        )
