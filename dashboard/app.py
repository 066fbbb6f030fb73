"""
Streamlit dashboard for the Crypto Spread Tracker.

Run with:
    streamlit run dashboard/app.py

Reads the ranked comparison from the API (python main.py must be running,
or set API_URL to point at a deployed instance).
"""

import os
import sys

import pandas as pd
import requests
import streamlit as st
from streamlit_autorefresh import st_autorefresh

sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from config import (
    API_URL,
    ARBITRAGE_THRESHOLD_PCT,
    DASHBOARD_REFRESH_MS,
    DASHBOARD_TIMEOUT_SECONDS,
    EXCHANGE_A,
    EXCHANGE_B,
)
from dashboard.formatting import filter_coins, format_price, summarize


def get_data():
    """Returns (payload, error_message)."""
    try:
        resp = requests.get(f"{API_URL}/coins", timeout=DASHBOARD_TIMEOUT_SECONDS)
        resp.raise_for_status()
        return resp.json(), None
    except requests.RequestException:
        return None, "Could not load data. Is the backend running?"


# ── Page config ────────────────────────────────────────────────────────────────
st.set_page_config(
    page_title="Arbitrage Pro",
    page_icon="🪙",
    layout="wide",
)

st.markdown("""
<style>
    .block-container { padding-top: 1.5rem; }

    .metric-card {
        background: #0e1117;
        border: 1px solid #2a2a2a;
        border-radius: 10px;
        padding: 16px 20px;
        text-align: center;
        margin-bottom: 8px;
    }
    .metric-label  { font-size: 0.8rem; color: #888; margin-bottom: 4px; }
    .metric-value  { font-size: 1.6rem; font-weight: 700; color: #fff; }

    .opp-card {
        background: #071a0e;
        border-left: 4px solid #00cc66;
        border-radius: 6px;
        padding: 14px 16px;
        margin-bottom: 12px;
        font-family: monospace;
        font-size: 0.82rem;
    }
    .rank-badge {
        display: inline-block;
        background: #1e1e1e;
        border-radius: 4px;
        padding: 1px 7px;
        font-size: 0.7rem;
        color: #aaa;
        margin-right: 6px;
        font-weight: 600;
    }
</style>
""", unsafe_allow_html=True)

# ── Auto-refresh, same cadence as the API cache window ────────────────────────
st_autorefresh(interval=DASHBOARD_REFRESH_MS, key="autorefresh")

data, error = get_data()

# ── HEADER ────────────────────────────────────────────────────────────────────
col_title, col_status = st.columns([6, 1])
with col_title:
    st.markdown(f"## 🪙 Arbitrage Pro  ·  {EXCHANGE_A} vs {EXCHANGE_B}")
with col_status:
    updated = data["guncelleme_zamani"] if data else "--:--:--"
    st.markdown(
        "<div style='text-align:right;padding-top:18px;'>"
        f"<span style='color:#00cc66;font-size:0.85rem;'>● LIVE {updated}</span></div>",
        unsafe_allow_html=True,
    )

st.markdown("---")

if error:
    st.error(error)
    if st.button("Retry"):
        st.rerun()
    st.stop()

# ── STATS CARDS ───────────────────────────────────────────────────────────────
stats = summarize(data)
cards = [
    ("Opportunities", stats["total_opportunities"]),
    ("Average spread", f"{stats['avg_spread']}%"),
    ("Highest spread", f"{stats['max_spread']}%"),
    ("Coins tracked", stats["total_coins"]),
]
for col, (label, value) in zip(st.columns(len(cards)), cards):
    with col:
        st.markdown(f"""
        <div class='metric-card'>
            <div class='metric-label'>{label}</div>
            <div class='metric-value'>{value}</div>
        </div>
        """, unsafe_allow_html=True)

# ── TOP OPPORTUNITIES ─────────────────────────────────────────────────────────
top = data["firsatlar"][:4]
if top:
    st.markdown("#### 🚨 Top Opportunities")
    for rank, (col, coin) in enumerate(zip(st.columns(4), top), start=1):
        with col:
            st.markdown(f"""
            <div class='opp-card'>
                <span class='rank-badge'>#{rank}</span>
                <b style='font-size:0.95rem;'>{coin["symbol"]}</b>
                <span style='float:right; color:#00cc66;'>+{coin["fark_yuzde"]:.2f}%</span>
                <div style='margin-top:10px; line-height:2;'>
                    BUY  <b>{coin["ucuz_borsa"]}</b><br>
                    SELL <b>{coin["pahali_borsa"]}</b><br>
                    {EXCHANGE_A}: {format_price(coin["binance_fiyat"])}<br>
                    {EXCHANGE_B}: {format_price(coin["gateio_fiyat"])}
                </div>
            </div>
            """, unsafe_allow_html=True)

st.markdown("<br>", unsafe_allow_html=True)

# ── TABLE ─────────────────────────────────────────────────────────────────────
left, right = st.columns([2, 3])
with left:
    view_label = st.radio("View", ["All coins", "Opportunities"], horizontal=True)
with right:
    search = st.text_input("Search symbol", "", disabled=view_label == "Opportunities")

rows = filter_coins(data, "opportunities" if view_label == "Opportunities" else "all", search)

if rows:
    df = pd.DataFrame([
        {
            "Coin": c["symbol"],
            EXCHANGE_A: format_price(c["binance_fiyat"]),
            EXCHANGE_B: format_price(c["gateio_fiyat"]),
            "Spread %": c["fark_yuzde"],
            "Buy on": c["ucuz_borsa"],
            "Sell on": c["pahali_borsa"],
            "Opportunity": "✅" if c["arbitraj_firsati"] else "",
        }
        for c in rows
    ])
    st.dataframe(
        df.style.format({"Spread %": "{:.2f}"}),
        use_container_width=True,
        hide_index=True,
    )
else:
    st.info(f"No coins to show (opportunity threshold: {ARBITRAGE_THRESHOLD_PCT}%).")

# ── FOOTER ────────────────────────────────────────────────────────────────────
st.markdown("---")
st.caption(
    f"Sources: {EXCHANGE_A} · {EXCHANGE_B} &nbsp;|&nbsp; "
    f"Refreshes every {DASHBOARD_REFRESH_MS // 1000}s &nbsp;|&nbsp; "
    f"⚠️ For educational purposes — not financial advice"
)
