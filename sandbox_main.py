#!/usr/bin/env python3
"""
Sandbox entrypoint for envinspect.
Reads scan parameters from stdin JSON, scans the repository, outputs the report JSON to stdout.

Input (stdin JSON):
{
  "path": ".",                  // required, local directory to scan
  "exclude": ["**/fixtures/**"], // optional, extra exclusion globs
  "max_files": 500,             // optional
  "generate_example": false,    // optional, write .env.example from <path>/.env
  "force": false                // optional, overwrite an existing .env.example
}
"""

import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent / "src"))

from envinspect.env_file import create_env_example, generate_gitignore_entry
from envinspect.report import scan_repository

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def main() -> None:
    try:
        input_data = json.load(sys.stdin)
    except json.JSONDecodeError as e:
        print(json.dumps({"error": f"Invalid JSON input: {e}"}))
        sys.exit(1)

    local_path = input_data.get("path") or input_data.get("directory")
    if not local_path:
        print(
            json.dumps(
                {
                    "error": "Missing required input. Provide 'path' (local directory)",
                    "examples": {"local": {"path": "."}},
                }
            )
        )
        sys.exit(1)

    max_files = input_data.get("max_files")
    if max_files is not None and (not isinstance(max_files, int) or max_files < 0):
        print(json.dumps({"error": f"Invalid max_files '{max_files}': expected a non-negative integer"}))
        sys.exit(1)

    try:
        report = scan_repository(
            local_path,
            exclude=input_data.get("exclude") or [],
            max_files=max_files,
        )
        output = {"report": report.model_dump(mode="json")}
        if report.summary.committed_env_files:
            output["gitignore_entry"] = generate_gitignore_entry()

        if input_data.get("generate_example"):
            env_path = Path(local_path) / ".env"
            if env_path.is_file():
                result = create_env_example(env_path, force=bool(input_data.get("force")))
                output["example"] = result.model_dump(mode="json", exclude={"content"})
            else:
                logger.info(f"No .env file found in {local_path}")
                output["example"] = None

        print(json.dumps(output))
    except Exception as e:
        print(json.dumps({"error": str(e)}))
        sys.exit(1)


if __name__ == "__main__":
    main()
