#!/usr/bin/env python3
"""
Kickbase Budget Alert - Entry Point

Single-shot budget check meant to be triggered by cron or a CI schedule.
The actual implementation is in the kickalert package.
"""

if __name__ == "__main__":
    from kickalert import main
    main()
