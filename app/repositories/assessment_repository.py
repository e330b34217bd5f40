"""
Assessment Repository - ISO 27001 Risk Assessment
app/repositories/assessment_repository.py

Data access layer for submitted assessments in the key-value store.

Keys:
    assessment:{id}     one JSON record per submission
    assessments:list    submission ids, oldest first
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID, uuid4

from pydantic import ValidationError

from app.models.assessment import AssessmentRecord, AssessmentScore, UserInfo
from app.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class AssessmentRepository(BaseRepository):
    """Repository for assessment submissions. Last write wins."""

    RECORD_PREFIX = "assessment:"
    INDEX_KEY = "assessments:list"

    def record_key(self, assessment_id: UUID) -> str:
        return f"{self.RECORD_PREFIX}{assessment_id}"

    def create(self, user_info: UserInfo, scores: AssessmentScore) -> AssessmentRecord:
        """
        Persist a scored submission.

        Args:
            user_info: Respondent details
            scores: Server-computed scores

        Returns:
            Stored AssessmentRecord
        """
        record = AssessmentRecord(
            id=uuid4(),
            user_name=user_info.name,
            user_email=str(user_info.email),
            company_name=user_info.company_name,
            location=user_info.location,
            answers=scores.answers,
            cluster_scores=scores.cluster_scores,
            total_score=scores.total_score,
            max_total_score=scores.max_total_score,
            overall_percentage=scores.overall_percentage,
            submitted_at=datetime.now(timezone.utc),
        )

        self.store.set(self.record_key(record.id), record)
        self.store.append_to_list(self.INDEX_KEY, str(record.id))

        logger.info(f"Stored assessment {record.id} for {record.company_name}")
        return record

    def get_by_id(self, assessment_id: UUID) -> Optional[AssessmentRecord]:
        """
        Retrieve an assessment by ID.

        Returns:
            AssessmentRecord or None if not found
        """
        data = self.store.get(self.record_key(assessment_id))
        if not data:
            return None
        return self._to_record(data)

    def list_ids(self) -> List[str]:
        return [str(i) for i in self.store.get_list(self.INDEX_KEY)]

    def list_all(self) -> List[AssessmentRecord]:
        """
        All stored assessments in submission order.

        Ids in the index whose record is missing or unreadable are skipped.
        """
        ids = self.list_ids()
        rows = self.store.mget([f"{self.RECORD_PREFIX}{i}" for i in ids])

        records = []
        for assessment_id, data in zip(ids, rows):
            if not data:
                logger.warning(f"Assessment {assessment_id} listed but not stored, skipping")
                continue
            record = self._to_record(data)
            if record is not None:
                records.append(record)
        return records

    def exists(self, assessment_id: UUID) -> bool:
        return self.store.exists(self.record_key(assessment_id))

    def delete(self, assessment_id: UUID) -> None:
        """Remove the record; its index entry is skipped on later reads."""
        self.store.delete(self.record_key(assessment_id))

    def _to_record(self, data) -> Optional[AssessmentRecord]:
        try:
            return AssessmentRecord.model_validate(data)
        except ValidationError as e:
            record_id = data.get("id") if isinstance(data, dict) else data
            logger.error(f"Stored assessment {record_id} is malformed: {e}")
            return None
