"""
ISO 27001 Risk Assessment - Streamlit UI
Assessment wizard, assessor dashboard and report view.

Run: streamlit run streamlit/app.py
"""

import requests
import streamlit as st

from data_loader import (
    ApiError,
    RATING_BADGES,
    build_assessments_df,
    build_categories_df,
    check_health,
    download_markdown,
    download_pdf,
    download_portfolio_summary,
    get_questions,
    get_report,
    list_assessments,
    login,
    signup,
    submit_assessment,
)
from components.charts import category_bar_chart, overall_gauge, summary_donut

st.set_page_config(
    page_title="ISO 27001 Risk Assessment",
    page_icon="🛡️",
    layout="wide",
    initial_sidebar_state="expanded",
)

PAGES = ["📝 Take Assessment", "📊 Dashboard", "📄 Report"]

for key, default in (
    ("page", PAGES[0]),
    ("step", 0),
    ("answers", {}),
    ("token", None),
    ("user", None),
    ("report_id", ""),
):
    if key not in st.session_state:
        st.session_state[key] = default


def _go_to_report(assessment_id: str) -> None:
    st.session_state["report_id"] = assessment_id
    st.session_state["page"] = PAGES[2]


# =====================================================================
# Sidebar
# =====================================================================
st.sidebar.markdown("## 🛡️ ISO 27001 Risk Assessment")
st.sidebar.caption("Information security maturity self-assessment")
st.sidebar.divider()

page = st.sidebar.radio("Navigate", PAGES, key="page")

st.sidebar.divider()
health = check_health()
if health.get("status") == "ok":
    st.sidebar.success("API online")
else:
    st.sidebar.error(f"API {health.get('status', 'unreachable')}")

if st.session_state["token"]:
    user = st.session_state["user"] or {}
    st.sidebar.caption(f"Signed in as {user.get('email', '')}")
    if st.sidebar.button("Sign out"):
        st.session_state["token"] = None
        st.session_state["user"] = None
        st.rerun()


# =====================================================================
# Assessment wizard
# =====================================================================
if page == PAGES[0]:
    st.title("📝 ISO 27001 Risk Assessment")

    try:
        clusters = get_questions()
    except (ApiError, requests.RequestException) as e:
        st.error(f"Could not load the question bank: {e}")
        st.stop()

    answers = st.session_state["answers"]
    step = st.session_state["step"]
    total_steps = len(clusters) + 1

    st.progress(step / total_steps, text=f"Step {step + 1} of {total_steps}")

    if step < len(clusters):
        cluster = clusters[step]
        st.subheader(cluster["title"])
        st.caption(cluster["description"])

        for question in cluster["questions"]:
            options = [o["value"] for o in question["options"]]
            labels = {o["value"]: o["label"] for o in question["options"]}
            current = answers.get(question["id"])
            choice = st.radio(
                question["text"],
                options,
                index=options.index(current) if current in options else None,
                format_func=lambda v, labels=labels: labels[v],
                key=f"q_{question['id']}",
            )
            if choice is not None:
                answers[question["id"]] = choice

        unanswered = [q["id"] for q in cluster["questions"] if q["id"] not in answers]

        col1, col2 = st.columns(2)
        if col1.button("← Previous", disabled=step == 0):
            st.session_state["step"] = step - 1
            st.rerun()
        if col2.button("Next →", disabled=bool(unanswered), type="primary"):
            st.session_state["step"] = step + 1
            st.rerun()
        if unanswered:
            st.caption("Answer every question in this section to continue.")

    else:
        st.subheader("Your details")
        with st.form("user_info"):
            name = st.text_input("Name")
            email = st.text_input("Email")
            company_name = st.text_input("Company name")
            location = st.text_input("Location")
            submitted = st.form_submit_button("Submit assessment", type="primary")

        if st.button("← Back to questions"):
            st.session_state["step"] = step - 1
            st.rerun()

        if submitted:
            if not all(v.strip() for v in (name, email, company_name, location)):
                st.error("All fields are required.")
            else:
                try:
                    assessment_id = submit_assessment(
                        {"name": name, "email": email, "companyName": company_name, "location": location},
                        answers,
                    )
                except ApiError as e:
                    st.error(f"Submission failed: {e.message}")
                else:
                    st.success("Assessment submitted.")
                    st.session_state["answers"] = {}
                    st.session_state["step"] = 0
                    st.button("View report →", on_click=_go_to_report, args=(assessment_id,), type="primary")
                    st.caption(f"Assessment ID: `{assessment_id}`")


# =====================================================================
# Dashboard
# =====================================================================
elif page == PAGES[1]:
    st.title("📊 Assessment Dashboard")

    if not st.session_state["token"]:
        tab_login, tab_signup = st.tabs(["Sign in", "Create account"])

        with tab_login:
            with st.form("login"):
                email = st.text_input("Email")
                password = st.text_input("Password", type="password")
                if st.form_submit_button("Sign in", type="primary"):
                    try:
                        session = login(email, password)
                    except ApiError as e:
                        st.error(e.message)
                    else:
                        st.session_state["token"] = session["accessToken"]
                        st.session_state["user"] = session["user"]
                        st.rerun()

        with tab_signup:
            with st.form("signup"):
                s_email = st.text_input("Email", key="s_email")
                s_password = st.text_input("Password", type="password", key="s_password")
                s_name = st.text_input("Name", key="s_name")
                s_company = st.text_input("Company name", key="s_company")
                s_location = st.text_input("Location", key="s_location")
                if st.form_submit_button("Create account"):
                    try:
                        signup(s_email, s_password, s_name, s_company, s_location)
                    except ApiError as e:
                        st.error(e.message)
                    else:
                        st.success("Account created. Sign in to continue.")
        st.stop()

    c1, c2, c3 = st.columns([3, 1, 1])
    query = c1.text_input("Search", placeholder="Name, email, company or location")
    sort_by = c2.selectbox("Sort by", ["date", "score", "company"])
    order = c3.radio("Order", ["desc", "asc"], horizontal=True)

    try:
        data = list_assessments(st.session_state["token"], query, sort_by, order)
    except ApiError as e:
        if e.status_code == 401:
            st.session_state["token"] = None
            st.warning("Session expired. Please sign in again.")
            st.stop()
        st.error(f"Could not load assessments: {e.message}")
        st.stop()

    summary = data["summary"]
    m1, m2, m3, m4 = st.columns(4)
    m1.metric("Assessments", summary["total"])
    m2.metric(RATING_BADGES["Good"], summary["good"])
    m3.metric(RATING_BADGES["Moderate"], summary["moderate"])
    m4.metric(RATING_BADGES["Needs Improvement"], summary["needsImprovement"])

    df = build_assessments_df(data["assessments"])
    if df.empty:
        st.info("No assessments match.")
        st.stop()

    col1, col2 = st.columns([3, 1])
    with col1:
        st.dataframe(df.drop(columns=["ID"]), use_container_width=True, hide_index=True)
    with col2:
        st.plotly_chart(summary_donut(summary), use_container_width=True, key="summary_donut")

    labels = {row["ID"]: f"{row['Company']} / {row['Name']} ({row['Submitted']})" for _, row in df.iterrows()}
    selected = st.selectbox("Open report", list(labels), format_func=lambda i: labels[i])
    b1, b2 = st.columns(2)
    b1.button("View report →", on_click=_go_to_report, args=(selected,))
    try:
        portfolio_md = download_portfolio_summary(st.session_state["token"])
    except (ApiError, requests.RequestException) as e:
        b2.error(f"Portfolio summary unavailable: {e}")
    else:
        b2.download_button(
            "⬇️ Portfolio summary (Markdown)",
            data=portfolio_md,
            file_name="ISO27001-Portfolio-Summary.md",
            mime="text/markdown",
        )


# =====================================================================
# Report
# =====================================================================
elif page == PAGES[2]:
    st.title("📄 Assessment Report")

    assessment_id = st.text_input("Assessment ID", key="report_id").strip()
    if not assessment_id:
        st.info("Enter an assessment ID, or open one from the dashboard.")
        st.stop()

    try:
        report = get_report(assessment_id)
    except ApiError as e:
        st.error(e.message)
        st.stop()

    record = report["assessment"]
    st.caption(
        f"**{record['companyName']}** | {record['location']} | "
        f"{record['userName']} ({record['userEmail']}) | submitted {record['submittedAt'][:10]}"
    )

    col1, col2 = st.columns([1, 2])
    with col1:
        st.plotly_chart(overall_gauge(record["overallPercentage"]), use_container_width=True, key="gauge")
        st.metric("Overall score", f"{record['totalScore']}/{record['maxTotalScore']} points")
        st.markdown(f"Status: **{RATING_BADGES[report['rating']]}**")
    with col2:
        categories_df = build_categories_df(record["clusterScores"])
        st.plotly_chart(category_bar_chart(categories_df), use_container_width=True, key="categories")

    st.subheader("Areas for Improvement")
    if report["allCategoriesStrong"]:
        st.success("Great job! All categories are performing well. Continue to maintain and improve your security controls.")
    for area in report["improvementAreas"]:
        st.markdown(f"- **{area['clusterTitle']}** ({area['percentage']}%): {area['description']}")

    st.subheader("Recommendations")
    for rec in report["recommendations"]:
        st.markdown(f"- {rec}")

    st.divider()
    d1, d2 = st.columns(2)
    company_slug = "-".join(record["companyName"].split())
    try:
        pdf_bytes = download_pdf(assessment_id)
        report_md = download_markdown(assessment_id)
    except (ApiError, requests.RequestException) as e:
        st.error(f"Report download unavailable: {e}")
        st.stop()

    d1.download_button(
        "⬇️ Download PDF",
        data=pdf_bytes,
        file_name=f"ISO27001-Assessment-Report-{company_slug}.pdf",
        mime="application/pdf",
        type="primary",
    )
    d2.download_button(
        "⬇️ Download Markdown",
        data=report_md,
        file_name=f"ISO27001-Assessment-Report-{company_slug}.md",
        mime="text/markdown",
    )
