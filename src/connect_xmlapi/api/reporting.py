"""Report operations.

Reports with a typed record decode into it; the quiz, question and
attendance reports return their ``row`` elements undecoded because their
column sets vary with the filters applied.
"""

from typing import List

from lxml import etree

from connect_xmlapi.api.base import ApiBase, join_query
from connect_xmlapi.api.query import build_query
from connect_xmlapi.models.reporting import EventInfo, QuotaInfo, TransactionInfo
from connect_xmlapi.models.status import ApiStatus, ResultStatus

ROWS = "//row"


class ReportingOperations(ApiBase):
    """Account, event, transaction and quiz reports."""

    def report_my_events(self) -> ResultStatus[List[EventInfo]]:
        status = self.process_api_request("report-my-events")
        return self._decode_many(status, EventInfo, "//my-events/event", root_name="event")

    def report_quotas(self) -> ResultStatus[QuotaInfo]:
        """Account quotas; an ``unlimited`` limit reads as 0."""
        status = self.process_api_request("report-quotas")
        return self._decode_first(status, QuotaInfo, "//report-quotas")

    def report_consolidated_transactions(
        self, filter_by: str = ""
    ) -> ResultStatus[List[TransactionInfo]]:
        """``report-bulk-consolidated-transactions``.

        Args:
            filter_by: Pre-encoded filter parameters, e.g. ``filter-type=meeting``
        """
        status = self.process_api_request("report-bulk-consolidated-transactions", filter_by)
        return self._decode_many(status, TransactionInfo, ROWS, root_name="row")

    def report_bulk_questions(self, filter_by: str = "") -> ResultStatus[List[etree._Element]]:
        status = self.process_api_request("report-bulk-questions", filter_by)
        return self._raw_elements(status, ROWS)

    def _sco_report(
        self, action: str, sco_id: str, filter_by: str = ""
    ) -> ResultStatus[List[etree._Element]]:
        if not sco_id:
            return ApiStatus.missing_argument("sco-id").with_result(None)
        status = self.process_api_request(action, join_query(build_query(sco_id=sco_id), filter_by))
        return self._raw_elements(status, ROWS)

    def report_quiz_interactions(self, sco_id: str, filter_by: str = ""):
        return self._sco_report("report-quiz-interactions", sco_id, filter_by)

    def report_quiz_question_answers(self, sco_id: str, filter_by: str = ""):
        return self._sco_report("report-quiz-question-answer-distribution", sco_id, filter_by)

    def report_quiz_question_distribution(self, sco_id: str, filter_by: str = ""):
        return self._sco_report("report-quiz-question-distribution", sco_id, filter_by)

    def report_quiz_question_response(self, sco_id: str, filter_by: str = ""):
        return self._sco_report("report-quiz-question-response", sco_id, filter_by)

    def report_quiz_summary(self, sco_id: str):
        return self._sco_report("report-quiz-summary", sco_id)

    def report_quiz_takers(self, sco_id: str, filter_by: str = ""):
        return self._sco_report("report-quiz-takers", sco_id, filter_by)

    def report_meeting_attendance(self, sco_id: str, filter_by: str = ""):
        """Attendance rows of a meeting (``report-meeting-attendance``)."""
        return self._sco_report("report-meeting-attendance", sco_id, filter_by)
