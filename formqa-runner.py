#!/usr/bin/env python3
import argparse
import asyncio
import glob
import os
import sys

import pytest
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

from formqa.browser.config import find_config_file, load_run_config
from formqa.utils.get_log import GetLog


async def check_playwright_browsers_async(headless=True):
    try:
        async with async_playwright() as p:
            browser = await p.chromium.launch(headless=headless)
            await browser.close()
        print("✅ Playwright browsers available (Async API startup successful)")
        return True
    except PlaywrightError as e:
        print(f"⚠️ Playwright browsers unavailable (Async API failed): {e}")
        return False


def discover_spec_files(pattern):
    """Expand the scenario file pattern relative to the current directory."""
    return sorted(path for path in glob.glob(pattern, recursive=True) if os.path.isfile(path))


def build_pytest_args(cfg, spec_files, extra_args=None, config_path=None):
    args = list(spec_files)
    if config_path:
        args += ["--formqa-config", os.path.abspath(config_path)]
    args += ["--base-url", cfg.base_url]
    if cfg.grep_tags:
        args += ["--grep-tags", cfg.grep_tags]
    if not cfg.headless:
        args.append("--headed")
    args += list(extra_args or [])
    return args


def parse_args():
    parser = argparse.ArgumentParser(description="Form validation E2E runner")
    parser.add_argument("--config", "-c", help="YAML configuration file path (optional, default auto-search config/config.yaml)")
    parser.add_argument("--base-url", help="Application under test, overrides the config file")
    parser.add_argument("--grep-tags", help="Tag expression selecting scenarios, e.g. 'smoke+login -slow'")
    parser.add_argument("--headed", action="store_true", help="Show the browser window")
    parser.add_argument("pytest_args", nargs=argparse.REMAINDER, help="Extra arguments passed to pytest after '--'")
    return parser.parse_args()


def main():
    args = parse_args()

    try:
        config_path = find_config_file(args.config)
        overrides = {"base_url": args.base_url, "grep_tags": args.grep_tags}
        if args.headed:
            overrides["headless"] = False
        cfg = load_run_config(config_path, overrides=overrides)
    except (FileNotFoundError, ValueError) as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        sys.exit(1)

    GetLog.get_log(log_level=cfg.log.get("level", "info"))
    print(f"🌐 Base URL: {cfg.base_url}")
    if cfg.grep_tags:
        print(f"🏷️ Tags: {cfg.grep_tags}")

    print("🔍 Checking Playwright browsers...")
    if not asyncio.run(check_playwright_browsers_async(cfg.headless)):
        print("Please manually run: `playwright install chromium` to install browser binaries, then retry.", file=sys.stderr)
        sys.exit(1)

    spec_files = discover_spec_files(cfg.spec_pattern)
    if not spec_files:
        print(f"❌ No scenario files match pattern: {cfg.spec_pattern}", file=sys.stderr)
        sys.exit(1)
    print(f"📋 {len(spec_files)} scenario file(s) found")

    extra = [a for a in args.pytest_args if a != "--"]
    sys.exit(pytest.main(build_pytest_args(cfg, spec_files, extra, config_path)))


if __name__ == "__main__":
    main()
