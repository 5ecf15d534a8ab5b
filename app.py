"""
Social Analytics Dashboard - Main Streamlit App
Engagement summary, daily trend chart and post browser for one account
"""

import streamlit as st
import pandas as pd
import sys
import os

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

from dashboard.config import configure_logging, export_secrets, load_settings
from dashboard.errors import DashboardError
from dashboard.service import AnalyticsService, MAX_DAYS, MIN_DAYS
from database.db_manager import DatabaseManager
from database.sample_data import seed_sample_data
from analytics.models import TrendDirection, TrendResult
from analytics.format import (
    format_chart_date,
    format_date,
    format_number,
    format_number_locale,
    format_percentage,
    format_platform,
    format_relative_time,
    format_trend,
)

# Streamlit Cloud: copy secrets to os.environ so all modules can use os.getenv()
# Locally, .env is used. On Streamlit Cloud, secrets are set in the dashboard.
try:
    export_secrets(st.secrets)
except FileNotFoundError:
    pass

settings = load_settings()
configure_logging(settings.log_level)


# Page configuration
st.set_page_config(
    page_title="Social Analytics",
    page_icon="📊",
    layout="wide"
)

PLATFORM_OPTIONS = ["all", "instagram", "tiktok"]
SORT_OPTIONS = {
    "Newest": "posted_at",
    "Engagement": "engagement",
    "Engagement Rate": "engagement_rate",
    "Likes": "likes",
}
DAYS_OPTIONS = {"Last 7 days": 7, "Last 30 days": 30, "Last 90 days": 90, "Last year": MAX_DAYS}


# Initialize services
@st.cache_resource
def get_db():
    return DatabaseManager(settings.db_path)


@st.cache_resource
def get_service():
    return AnalyticsService(
        get_db(),
        window_days=settings.trend_window_days,
        default_days=settings.default_days,
    )


def init_session_state():
    """Initialize session state variables"""
    if 'selected_platform' not in st.session_state:
        st.session_state.selected_platform = 'all'
    if 'chart_view_type' not in st.session_state:
        st.session_state.chart_view_type = 'line'
    if 'selected_post_id' not in st.session_state:
        st.session_state.selected_post_id = None


def _trend_delta(trend: dict):
    """Map a serialized trend onto st.metric's delta / delta_color."""
    result = TrendResult(trend['percentage'], TrendDirection(trend['direction']))
    if result.direction == TrendDirection.UP:
        return format_trend(result), "normal"
    if result.direction == TrendDirection.DOWN:
        return "-" + format_trend(result), "normal"
    return format_trend(result), "off"


def display_summary_cards(user_id: str):
    try:
        data = get_service().get_summary(user_id)
    except DashboardError as e:
        st.error(f"❌ Failed to load analytics data: {e.message}")
        return

    delta, delta_color = _trend_delta(data['trend'])
    top_post = data['topPerformingPost']

    c1, c2, c3, c4 = st.columns(4)
    with c1:
        st.metric("Total Engagement", format_number_locale(data['totalEngagement']),
                  delta=delta, delta_color=delta_color, help="Sum of all interactions")
    with c2:
        st.metric("Average Engagement Rate", format_percentage(data['averageEngagementRate'], decimals=2),
                  help="Across all posts that report a rate")
    with c3:
        if top_post:
            st.metric("Top Performing Post", f"{format_number_locale(top_post['engagement'])} interactions")
            st.caption(f"{format_platform(top_post['platform'])} • {format_date(top_post['postedAt'])}")
        else:
            st.metric("Top Performing Post", "No posts yet")
    with c4:
        st.metric("Engagement Trend", format_percentage(data['trend']['percentage']),
                  delta=delta, delta_color=delta_color, help=f"Last {settings.trend_window_days} days vs previous")


def display_engagement_chart(user_id: str):
    col_title, col_days, col_view = st.columns([3, 1, 1])
    with col_title:
        st.subheader("📈 Engagement Over Time")
    with col_days:
        days_label = st.selectbox("Range", list(DAYS_OPTIONS.keys()), index=1,
                                  label_visibility="collapsed")
    with col_view:
        st.session_state.chart_view_type = st.radio(
            "Chart", ["line", "area"],
            index=0 if st.session_state.chart_view_type == 'line' else 1,
            horizontal=True,
            label_visibility="collapsed",
        )

    days = DAYS_OPTIONS[days_label]
    try:
        points = get_service().get_daily_metrics(user_id, days)
    except DashboardError as e:
        st.error(f"❌ Failed to load engagement data: {e.message}")
        return

    st.caption(f"Daily engagement for the last {days} days ({MIN_DAYS}-{MAX_DAYS} supported)")

    frame = pd.DataFrame(points)
    frame['date'] = pd.to_datetime(frame['date'])
    frame = frame.set_index('date')

    if st.session_state.chart_view_type == 'line':
        st.line_chart(frame, y='engagement', height=400)
    else:
        st.area_chart(frame, y='engagement', height=400)

    with st.expander("Daily values"):
        table = frame.copy()
        table.index = table.index.map(format_chart_date)
        st.dataframe(table, use_container_width=True)


def display_posts_table(user_id: str):
    st.subheader("📝 Posts")

    col_platform, col_sort = st.columns([2, 1])
    with col_platform:
        st.session_state.selected_platform = st.radio(
            "Platform",
            PLATFORM_OPTIONS,
            index=PLATFORM_OPTIONS.index(st.session_state.selected_platform),
            format_func=lambda p: "All" if p == "all" else format_platform(p),
            horizontal=True,
        )
    with col_sort:
        sort_label = st.selectbox("Sort by", list(SORT_OPTIONS.keys()))

    try:
        posts = get_service().get_posts(
            user_id,
            platform=st.session_state.selected_platform,
            sort_by=SORT_OPTIONS[sort_label],
        )
    except DashboardError as e:
        st.error(f"❌ Failed to load posts: {e.message}")
        return

    if not posts:
        st.info("No posts found for this platform.")
        return

    for post in posts[:50]:
        with st.container():
            col_thumb, col_info, col_metrics, col_action = st.columns([0.8, 3, 3, 1])

            with col_thumb:
                if post.thumbnail_url:
                    st.image(post.thumbnail_url, width=64)

            with col_info:
                caption = (post.caption or "No caption")[:80]
                if post.caption and len(post.caption) > 80:
                    caption += "..."
                st.markdown(f"**{caption}**")
                st.caption(f"{format_platform(post.platform)} • {format_relative_time(post.posted_at)}")

            with col_metrics:
                m1, m2, m3, m4 = st.columns(4)
                with m1:
                    st.metric("❤️ Likes", format_number(post.likes))
                with m2:
                    st.metric("💬 Comments", format_number(post.comments))
                with m3:
                    st.metric("🔄 Shares", format_number(post.shares))
                with m4:
                    st.metric("📊 Rate", format_percentage(post.engagement_rate))

            with col_action:
                if st.button("Details", key=f"detail_{post.id}", use_container_width=True):
                    st.session_state.selected_post_id = post.id
                    st.rerun()

        st.markdown("---")


def display_post_detail(user_id: str):
    post_id = st.session_state.selected_post_id
    if not post_id:
        return

    try:
        post = get_service().get_post(user_id, post_id)
    except DashboardError as e:
        st.error(f"❌ {e.message}")
        st.session_state.selected_post_id = None
        return

    with st.container(border=True):
        col_header, col_close = st.columns([5, 1])
        with col_header:
            st.subheader("🔍 Post Details")
        with col_close:
            if st.button("✕ Close", key="close_post_detail"):
                st.session_state.selected_post_id = None
                st.rerun()

        col_img, col_body = st.columns([1, 3])
        with col_img:
            if post.thumbnail_url:
                st.image(post.thumbnail_url, use_container_width=True)
        with col_body:
            st.markdown(post.caption or "_No caption_")
            st.caption(
                f"{format_platform(post.platform)} • "
                f"{post.media_type or 'post'} • "
                f"{format_date(post.posted_at, include_time=True)}"
            )

        m = st.columns(6)
        m[0].metric("Likes", format_number_locale(post.likes))
        m[1].metric("Comments", format_number_locale(post.comments))
        m[2].metric("Shares", format_number_locale(post.shares))
        m[3].metric("Engagement Rate", format_percentage(post.engagement_rate))
        if post.impressions is not None:
            m[4].metric("Impressions", format_number(post.impressions))
        if post.reach is not None:
            m[5].metric("Reach", format_number(post.reach))


def display_sidebar(user_id: str):
    st.sidebar.header("Account")
    st.sidebar.caption(f"Signed in as `{user_id}`")
    st.sidebar.divider()
    if st.sidebar.button("🧪 Load sample data", use_container_width=True):
        with st.spinner("Seeding sample posts and daily metrics..."):
            count = seed_sample_data(get_db(), user_id)
        st.sidebar.success(f"✅ Added {count} sample posts")
        st.rerun()


def main():
    init_session_state()

    st.title("📊 Social Analytics")
    st.markdown("*Instagram & TikTok engagement dashboard*")

    user_id = settings.user_id
    if not user_id:
        st.warning("⚠️ Set DASHBOARD_USER_ID in .env to choose whose analytics to show.")
        return

    display_sidebar(user_id)
    display_summary_cards(user_id)
    st.divider()

    tab_chart, tab_posts = st.tabs(["📈 Engagement", "📝 Posts"])
    with tab_chart:
        display_engagement_chart(user_id)
    with tab_posts:
        display_post_detail(user_id)
        display_posts_table(user_id)


if __name__ == "__main__":
    main()
