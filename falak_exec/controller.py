import json
from typing import Any, Callable

from falak.config import MissingConfigurationError
from falak.logging_config import logger


async def run_workflow(command_name: str, input_data: dict, workflow_func: Callable[[], Any]) -> int:
    """Run a workflow, log its result, and return the process exit code."""
    logger.info(f"Started workflow: {command_name} {json.dumps(input_data, default=str)}")
    try:
        result = await workflow_func()
    except MissingConfigurationError as e:
        logger.error(f"❌ {e}")
        return 1
    except Exception as e:
        logger.error(f"❌ Unhandled error: {e}")
        return 1

    run_status = "completed" if result.get("error_message") is None else "failed"

    logger.info("Workflow result:")
    logger.info(json.dumps(result, indent=2, default=str, ensure_ascii=False))
    logger.info(f"Workflow {command_name} finished with status: {run_status}")

    return 0 if run_status == "completed" else 1
