import os
import subprocess
from pathlib import Path

ROOT = Path(__file__).resolve().parent
PYTHON_DIR = os.path.join(ROOT, "src", "py")


def run(cmd, **kwargs):
    print(" ".join(cmd))
    subprocess.run(cmd, check=True, **kwargs)


def main():
    env = os.environ.copy()
    env["PYTHONPATH"] = os.pathsep.join(
        p for p in (PYTHON_DIR, env.get("PYTHONPATH")) if p
    )
    run(
        ["python", "-m", "pytest", "-v"],
        cwd=PYTHON_DIR,
        env=env,
    )


if __name__ == "__main__":
    main()
