"""
Run the course manager as a module:

    python -m coursemanager courses list
    python -m coursemanager interactive

Arguments are the same as for the `coursemanager` console script.
"""

from coursemanager.cli import main

if __name__ == "__main__":
    main()
