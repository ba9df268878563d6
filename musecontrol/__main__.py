# ABOUTME: Entry point for running musecontrol as a module
# ABOUTME: Allows execution via python -m musecontrol

from musecontrol.app import main

if __name__ == "__main__":
    main()
