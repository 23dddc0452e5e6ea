#!/usr/bin/env python3
"""
Sync personal projects in config/projects.json from the GitHub account named
by githubUsername in config/portfolio.json.

Repositories qualify when their README has an Abstract, Overview, Description
or Project Description section. Professional projects and manual fields such
as liveUrl are preserved.

Usage:
  python scripts/sync_portfolio.py            # one sync cycle
  python scripts/sync_portfolio.py serve      # sync now, then every interval
  python scripts/sync_portfolio.py list       # print persisted projects

Environment variables:
  GITHUB_TOKEN: Personal access token; includes private repos you own
  SYNC_INTERVAL_DAYS: Days between scheduled syncs (default: 7)
  PORTFOLIO_CONFIG_DIR: Directory with portfolio.json/projects.json (default: config)
  LOG_LEVEL: Logging level (default: INFO)
"""

import sys

from portfolio_sync.controller import main

if __name__ == "__main__":
    sys.exit(main())
