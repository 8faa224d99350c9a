#!/usr/bin/env python3
"""
Response Parser Module
1. Finds the JSON object in the model output (plain, fenced, or wrapped in prose).
2. Maps it onto the AnalysisReport contract, failing loudly on any shape problem.
"""

import json
import re
from typing import Optional

from core.errors import MalformedResponseError
from core.models import AnalysisReport
from utils.helpers import safe_log


class ResponseParser:
    """
    Strict parser: anything that is not a complete report is an error.
    """

    @staticmethod
    def parse_report(raw_text: str, error_message: str) -> AnalysisReport:
        """
        Parse model text into an AnalysisReport.
        error_message is the user-facing text carried by MalformedResponseError.
        """
        cleaned_json = ResponseParser._extract_json_structure(raw_text)

        if not cleaned_json:
            safe_log(f"Parser: Could not find JSON. Response start: {(raw_text or '')[:200]}...", "ERROR")
            raise MalformedResponseError(error_message)

        try:
            data = json.loads(cleaned_json)
        except json.JSONDecodeError:
            safe_log("Parser: JSON Error, attempting heuristic fix...", "WARNING")
            healed_json = ResponseParser._heuristic_fix_json(cleaned_json)
            try:
                data = json.loads(healed_json)
            except json.JSONDecodeError as e:
                safe_log(f"Parser: Fatal JSON error: {e}", "ERROR")
                raise MalformedResponseError(error_message) from e

        try:
            return AnalysisReport.from_dict(data)
        except MalformedResponseError as e:
            safe_log(f"Parser: Shape violation - {e}. Response start: {cleaned_json[:200]}...", "ERROR")
            raise MalformedResponseError(error_message) from e

    @staticmethod
    def _extract_json_structure(text: str) -> Optional[str]:
        if not text: return None
        text = text.strip()

        # 1. Code Block Regex
        code_block = re.search(r'```(?:json)?\s*(\{[\s\S]*?\})\s*```', text)
        if code_block: return code_block.group(1)

        # 2. Greedy Search (first '{' to last '}')
        match = re.search(r'\{[\s\S]*\}', text)
        if match: return match.group(0)

        return None

    @staticmethod
    def _heuristic_fix_json(bad_json: str) -> str:
        fixed = bad_json.replace('\t', '    ').replace('\r', '')
        # Trailing commas before a closing bracket
        return re.sub(r',\s*([\]\}])', r'\1', fixed)
