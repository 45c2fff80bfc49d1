"""Module entrypoint for `python -m project_spec_designer.checker`."""

from .run_check import main


if __name__ == "__main__":
    main()
