"""Ambient Lambda environment captured once at logger construction."""

import os
from collections.abc import Mapping
from dataclasses import dataclass

FUNCTION_NAME_VAR = "AWS_LAMBDA_FUNCTION_NAME"
EXECUTION_ENV_VAR = "AWS_EXECUTION_ENV"
MEMORY_SIZE_VAR = "AWS_LAMBDA_FUNCTION_MEMORY_SIZE"
FUNCTION_VERSION_VAR = "AWS_LAMBDA_FUNCTION_VERSION"
LOG_STREAM_NAME_VAR = "AWS_LAMBDA_LOG_STREAM_NAME"
TRACE_ID_VAR = "_X_AMZN_TRACE_ID"

SAMPLED_MARKER = "Sampled=1"
SERVICE_TYPE = "AWS::Lambda::Function"


@dataclass(frozen=True)
class AmbientEnvironment:
    """Immutable snapshot of the environment signals the logger reads.

    Missing variables are captured as empty strings.

    Attributes:
        function_name: Lambda function name. Gates all Lambda defaults.
        execution_env: Runtime identifier, e.g. "AWS_Lambda_python3.12".
        memory_size: Configured memory in MB, verbatim.
        function_version: Function version, verbatim.
        log_stream_name: CloudWatch log stream of the invocation.
        trace_id: X-Ray trace header.
    """

    function_name: str = ""
    execution_env: str = ""
    memory_size: str = ""
    function_version: str = ""
    log_stream_name: str = ""
    trace_id: str = ""

    @classmethod
    def from_environ(
        cls, environ: Mapping[str, str] | None = None
    ) -> "AmbientEnvironment":
        """Capture the snapshot from a mapping (default: ``os.environ``).

        Args:
            environ: Mapping to read from. Defaults to the process environment.

        Returns:
            AmbientEnvironment with every signal read exactly once.
        """
        env = os.environ if environ is None else environ
        return cls(
            function_name=env.get(FUNCTION_NAME_VAR, ""),
            execution_env=env.get(EXECUTION_ENV_VAR, ""),
            memory_size=env.get(MEMORY_SIZE_VAR, ""),
            function_version=env.get(FUNCTION_VERSION_VAR, ""),
            log_stream_name=env.get(LOG_STREAM_NAME_VAR, ""),
            trace_id=env.get(TRACE_ID_VAR, ""),
        )

    @property
    def in_lambda(self) -> bool:
        """True when a function name is present."""
        return self.function_name != ""

    @property
    def sampled_trace_id(self) -> str | None:
        """The trace id if it was sampled, otherwise None."""
        if SAMPLED_MARKER in self.trace_id:
            return self.trace_id
        return None

    def function_properties(self) -> dict[str, str]:
        """Properties describing the Lambda function and invocation."""
        return {
            "executionEnvironment": self.execution_env,
            "memorySize": self.memory_size,
            "functionVersion": self.function_version,
            "logStreamId": self.log_stream_name,
        }

    def service_properties(self) -> dict[str, str]:
        """ServiceType/ServiceName values backing the default dimension set."""
        return {
            "ServiceType": SERVICE_TYPE,
            "ServiceName": self.function_name,
        }
