#!/usr/bin/env python3
"""
OpenAI Service Module - Chat Completions
Single gateway to the model. Returns (success, text, error) tuples and never raises.
"""

from openai import AsyncOpenAI
from typing import Any, Dict, List, Optional, Tuple

from core.config import Settings
from utils.helpers import safe_log


class OpenAIService:
    def __init__(self, settings: Settings):
        self.api_key = settings.api_key
        self.model = settings.model
        self.timeout = settings.request_timeout

    def _create_client(self) -> AsyncOpenAI:
        return AsyncOpenAI(api_key=self.api_key, timeout=self.timeout)

    async def get_completion(self,
                             messages: List[Dict[str, Any]],
                             task_name: str = "Request",
                             response_schema: Optional[Dict[str, Any]] = None,
                             schema_name: str = "analysis_report") -> Tuple[bool, Optional[str], Optional[str]]:
        """
        Sends one chat completion request.
        If response_schema is given, the model is forced into strict JSON output.
        """
        request_args: Dict[str, Any] = {
            "model": self.model,
            "messages": messages,
        }
        if response_schema is not None:
            request_args["response_format"] = {
                "type": "json_schema",
                "json_schema": {
                    "name": schema_name,
                    "schema": response_schema,
                    "strict": True,
                },
            }

        try:
            # A fresh client per call: each call may run on a different event loop
            async with self._create_client() as client:
                response = await client.chat.completions.create(**request_args)

            if not response.choices:
                safe_log(f"{task_name}: No choices returned", "ERROR")
                return False, None, "AI Error: empty response"

            choice = response.choices[0]
            if getattr(choice.message, "refusal", None):
                safe_log(f"{task_name}: Model refused - {choice.message.refusal}", "ERROR")
                return False, None, f"AI Error: {choice.message.refusal}"

            result_text = choice.message.content or ""
            safe_log(f"{task_name}: Success ({len(result_text)} chars)")
            return True, result_text, None

        except Exception as e:
            safe_log(f"{task_name}: Exception - {str(e)}", "ERROR")
            return False, None, f"System Error: {str(e)}"
