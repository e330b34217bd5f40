from enum import Enum

class MaturityRating(str, Enum):
    GOOD = "Good"
    MODERATE = "Moderate"
    NEEDS_IMPROVEMENT = "Needs Improvement"

class SortField(str, Enum):
    DATE = "date"          # submittedAt
    SCORE = "score"        # overallPercentage
    COMPANY = "company"    # companyName

class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"
