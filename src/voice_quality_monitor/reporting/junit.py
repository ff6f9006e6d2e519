"""JUnit XML report writer for CI/CD integration."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

_DIMENSIONS = ("latency", "connection", "audio_quality")


class JUnitXMLWriter:
    """
    Turn compliance assessments into JUnit XML so CI systems
    (Jenkins, GitHub Actions, GitLab CI, etc.) can gate on them.

    Each target dimension of each session becomes one testcase.
    """

    def __init__(self, suite_name: str = "voice-quality-monitor"):
        self.suite_name = suite_name

    def write(
        self,
        reports: list[dict[str, Any]],
        output_path: str | Path = "results.xml",
    ) -> Path:
        testsuite = ET.Element("testsuite")
        testsuite.set("name", self.suite_name)
        testsuite.set("timestamp", datetime.now(timezone.utc).isoformat())

        total = 0
        failures = 0
        skipped = 0

        for i, report in enumerate(reports):
            session_name = report.get("name", f"session_{i}")
            assessment = report.get("prd_assessment") or {}
            duration = (report.get("session_duration") or 0) / 1000

            if assessment.get("status") == "insufficient_data":
                total += 1
                skipped += 1
                testcase = ET.SubElement(testsuite, "testcase")
                testcase.set("classname", self.suite_name)
                testcase.set("name", session_name)
                testcase.set("time", f"{duration:.3f}")
                skip = ET.SubElement(testcase, "skipped")
                skip.set("message", assessment.get("message", ""))
                continue

            for name in _DIMENSIONS:
                dimension = assessment.get(name)
                if dimension is None:
                    continue
                total += 1
                testcase = ET.SubElement(testsuite, "testcase")
                testcase.set("classname", f"{self.suite_name}.{session_name}")
                testcase.set("name", name)
                testcase.set("time", f"{duration:.3f}")

                if not dimension["compliant"]:
                    failures += 1
                    failure = ET.SubElement(testcase, "failure")
                    failure.set("message", f"{name} target not met")
                    failure.text = (
                        f"Target: {dimension['target']}\n"
                        f"Actual: {dimension['actual']}\n"
                        f"Rating: {dimension['rating']}"
                    )

        testsuite.set("tests", str(total))
        testsuite.set("failures", str(failures))
        testsuite.set("errors", "0")
        testsuite.set("skipped", str(skipped))

        tree = ET.ElementTree(testsuite)
        output_path = Path(output_path)
        ET.indent(tree, space="  ")
        tree.write(output_path, encoding="unicode", xml_declaration=True)
        return output_path
