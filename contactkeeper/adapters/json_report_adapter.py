"""
JsonReportAdapter - Implements IReportWriter.
Writes verification-report-<epoch-ms>.json, the durable audit trail of a run.
Key names are stable across runs so downstream tooling can parse old reports.
"""

import json
import logging
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import List

from ..domain.entities.batch_outcome import BatchOutcome
from ..domain.entities.report_summary import ReportSummary
from ..domain.entities.verification_result import VerificationResult
from ..domain.interfaces.i_report_writer import IReportWriter

logger = logging.getLogger(__name__)


def result_to_dict(result: VerificationResult) -> dict:
    return {
        "id": result.contact_id,
        "name": result.contact_name,
        "company": result.company,
        "status": result.status.value,
        "confidence": result.confidence,
        "notes": result.notes,
        "sourceUrl": result.source_url,
        "issues": list(result.issues),
        "recommendations": list(result.recommendations),
    }


def build_report(
    results: List[VerificationResult],
    summary: ReportSummary,
    outcome: BatchOutcome,
    timestamp: datetime,
) -> dict:
    return {
        "timestamp": timestamp.isoformat(),
        "summary": dict(summary.counts_by_status),
        "totalProcessed": summary.total_processed,
        "averageConfidence": summary.average_confidence,
        "insights": list(summary.insights),
        "persistence": {
            "dryRun": outcome.dry_run,
            "successCount": outcome.success_count,
            "errorCount": outcome.error_count,
            "errors": list(outcome.errors),
        },
        "details": [result_to_dict(r) for r in results],
    }


class JsonReportAdapter(IReportWriter):
    def __init__(self, report_dir: str = "."):
        self.report_dir = Path(report_dir)

    def save(
        self,
        results: List[VerificationResult],
        summary: ReportSummary,
        outcome: BatchOutcome,
    ) -> str:
        now = datetime.now(timezone.utc)
        self.report_dir.mkdir(parents=True, exist_ok=True)
        path = self.report_dir / f"verification-report-{int(time.time() * 1000)}.json"
        report = build_report(results, summary, outcome, now)
        path.write_text(json.dumps(report, indent=2, ensure_ascii=False), encoding="utf-8")
        logger.info(f"[Report] Saved {len(results)} result(s) to {path}")
        return str(path)
