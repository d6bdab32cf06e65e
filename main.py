#!/usr/bin/env python3
"""
Main entry point for VSCode debugging compatibility.

The actual application entry point is defined in statusbot_lite.__main__:main
and can be run using: python -m statusbot_lite
"""

if __name__ == "__main__":
    from statusbot_lite.__main__ import main

    main()
