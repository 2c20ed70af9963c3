"""
Tests for run statistics and service results.
"""

from catalog.services.stats import ResultStatus, ServiceResult, TraversalStats


class TestTraversalStats:
    """Tests for TraversalStats."""

    def test_add(self):
        stats = TraversalStats(num_processed=2, num_updated=1, num_skipped=1)

        stats.add(TraversalStats(num_processed=3, num_updated=2, num_error=1))

        assert stats == TraversalStats(num_processed=5, num_updated=3, num_skipped=1, num_error=1)

    def test_result_success_without_errors(self):
        result = TraversalStats(num_processed=4, num_updated=4).to_result("done")

        assert result.status == ResultStatus.SUCCESS
        assert result.is_success
        assert result.message == "done"
        assert result.num_processed == 4

    def test_result_failure_with_errors(self):
        result = TraversalStats(num_processed=4, num_updated=3, num_error=1).to_result()

        assert result.status == ResultStatus.FAILURE
        assert not result.is_success
        assert not result.is_error
        assert result.num_error == 1

    def test_message(self):
        stats = TraversalStats(num_processed=10, num_updated=7, num_skipped=2, num_error=1)

        assert stats.to_message("en") == "Processed: 10; updated: 7; skipped: 2; errors: 1"


class TestServiceResult:
    """Tests for ServiceResult."""

    def test_error(self):
        result = ServiceResult.error("Catalog not found", num_error=1)

        assert result.is_error
        assert result.num_error == 1
        assert result.num_processed == 0

    def test_to_dict(self):
        result = ServiceResult(status=ResultStatus.SUCCESS, message="ok", num_processed=1, num_updated=1)

        assert result.to_dict() == {
            "status": "success",
            "message": "ok",
            "num_processed": 1,
            "num_updated": 1,
            "num_skipped": 0,
            "num_error": 0,
        }

    def test_to_dict_includes_main_content_id(self):
        result = ServiceResult(main_content_id=42)

        assert result.to_dict()["main_content_id"] == 42
