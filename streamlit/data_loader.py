"""
data_loader.py - Centralized API access for the Streamlit UI.
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd
import requests
import streamlit as st
from dotenv import load_dotenv

# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------
load_dotenv(Path(__file__).parent.parent / ".env")

API_BASE = os.getenv("FASTAPI_URL", "http://localhost:8000")
API_PREFIX = os.getenv("API_V1_PREFIX", "/api/v1")

RATING_BADGES = {
    "Good": "🟢 Good",
    "Moderate": "🟡 Moderate",
    "Needs Improvement": "🔴 Needs Improvement",
}


class ApiError(Exception):
    """Non-2xx response from the assessment API."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}")


# ---------------------------------------------------------------------------
# API helpers
# ---------------------------------------------------------------------------
def api_url(path: str) -> str:
    return f"{API_BASE.rstrip('/')}{API_PREFIX}/{path.lstrip('/')}"


def _request(method: str, path: str, token: Optional[str] = None, timeout: int = 30, **kwargs) -> requests.Response:
    headers = kwargs.pop("headers", {})
    if token:
        headers["Authorization"] = f"Bearer {token}"
    r = requests.request(method, api_url(path), headers=headers, timeout=timeout, **kwargs)
    if r.status_code >= 400:
        try:
            message = r.json().get("error", r.text)
        except ValueError:
            message = r.text
        raise ApiError(r.status_code, message)
    return r


def check_health() -> Dict[str, Any]:
    try:
        r = requests.get(api_url("/health"), timeout=5)
        return r.json()
    except (requests.RequestException, ValueError):
        return {"status": "unreachable", "dependencies": {}}


@st.cache_data(ttl=600)
def get_questions() -> List[Dict[str, Any]]:
    """Question clusters in questionnaire order."""
    return _request("GET", "/questions").json()["clusters"]


def submit_assessment(user_info: Dict[str, str], answers: Dict[str, str]) -> str:
    """Submit and return the new assessment id."""
    payload = {
        "userInfo": user_info,
        "answers": [{"questionId": qid, "value": value} for qid, value in answers.items()],
    }
    return _request("POST", "/submit-assessment", json=payload).json()["assessmentId"]


def signup(email: str, password: str, name: str, company_name: str, location: str) -> Dict[str, Any]:
    payload = {
        "email": email,
        "password": password,
        "name": name,
        "companyName": company_name,
        "location": location,
    }
    return _request("POST", "/signup", json=payload).json()


def login(email: str, password: str) -> Dict[str, Any]:
    return _request("POST", "/login", json={"email": email, "password": password}).json()


def list_assessments(token: str, q: str = "", sort_by: str = "date", order: str = "desc") -> Dict[str, Any]:
    params = {"sort_by": sort_by, "order": order}
    if q:
        params["q"] = q
    return _request("GET", "/assessments", token=token, params=params).json()


def get_report(assessment_id: str) -> Dict[str, Any]:
    return _request("GET", f"/assessment/{assessment_id}/report").json()


def download_pdf(assessment_id: str) -> bytes:
    return _request("GET", f"/assessment/{assessment_id}/report.pdf", timeout=60).content


def download_markdown(assessment_id: str) -> str:
    return _request("GET", f"/assessment/{assessment_id}/report.md").text


def download_portfolio_summary(token: str) -> str:
    return _request("GET", "/assessments/report.md", token=token).text


# ---------------------------------------------------------------------------
# DataFrames
# ---------------------------------------------------------------------------
def build_assessments_df(assessments: List[Dict[str, Any]], good: int = 75, moderate: int = 50) -> pd.DataFrame:
    """One row per assessment, in the order the API returned them."""
    if not assessments:
        return pd.DataFrame()

    rows = []
    for a in assessments:
        pct = a["overallPercentage"]
        rating = "Good" if pct >= good else "Moderate" if pct >= moderate else "Needs Improvement"
        rows.append({
            "ID": a["id"],
            "Name": a["userName"],
            "Email": a["userEmail"],
            "Company": a["companyName"],
            "Location": a["location"],
            "Score": pct,
            "Status": RATING_BADGES[rating],
            "Submitted": pd.to_datetime(a["submittedAt"]).strftime("%Y-%m-%d %H:%M"),
        })
    return pd.DataFrame(rows)


def build_categories_df(cluster_scores: List[Dict[str, Any]]) -> pd.DataFrame:
    return pd.DataFrame([
        {
            "Category": cs["clusterTitle"],
            "Score": cs["score"],
            "Max": cs["maxScore"],
            "Percentage": cs["percentage"],
        }
        for cs in cluster_scores
    ])
