"""
scoring/ - ISO 27001 Maturity Scoring

Modules:
    utils.py                  - Decimal rounding and percentage helpers
    questions.py              - Question bank (8 clusters, 25 questions)
    maturity_calculator.py    - Cluster / overall percentages and ratings
    recommendations.py        - Improvement areas and general recommendations
"""
