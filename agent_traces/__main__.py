import sys

from agent_traces.cli import main

if __name__ == "__main__":
    sys.exit(main())
