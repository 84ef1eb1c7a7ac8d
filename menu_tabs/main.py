#!/usr/bin/env python3
"""
Mensa Week Tabs
Fetches the JKU Mensa and KHG Mensa menus and writes one HTML page with a tab per weekday
"""

import sys
import time
import argparse
import traceback
from pathlib import Path

from common.errors import MenuError
from menu_tabs.api_fetcher import fetch_api_menu
from menu_tabs.html_scraper import fetch_scraped_menu
from menu_tabs.renderer import render_week_tabs

DEFAULT_OUTPUT = "menu_for_week_tabs.html"


def run(output_file: Path) -> int:
    """
    Fetch both menus, render and write the page

    Both sources must succeed; no page is written if either one fails.

    Args:
        output_file: Path of the HTML file to write

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    try:
        # Step 1: JKU Mensa (GraphQL API)
        print("\n[1/4] Fetching JKU Mensa menu...")
        start_time = time.time()
        jku_menu = fetch_api_menu()
        elapsed = time.time() - start_time
        print(f"  ⏱️  API fetch took {elapsed:.2f}s")

        # Step 2: KHG Mensa (HTML page)
        print("\n[2/4] Scraping KHG Mensa menu...")
        start_time = time.time()
        khg_menu = fetch_scraped_menu()
        elapsed = time.time() - start_time
        print(f"  ⏱️  Scraping took {elapsed:.2f}s")

        # Step 3: Render
        print("\n[3/4] Rendering week tabs...")
        html = render_week_tabs(jku_menu, khg_menu)

        # Step 4: Write output
        print("\n[4/4] Writing HTML output...")
        output_file.parent.mkdir(parents=True, exist_ok=True)
        with open(output_file, 'w', encoding='utf-8') as f:
            f.write(html)

        print("\n" + "=" * 50)
        print("Success!")
        print(f"  Week tabs: {output_file}")
        print("=" * 50)
        return 0

    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        return 130
    except MenuError as e:
        print(f"\n\nError fetching menus: {e}")
        return 1
    except OSError as e:
        print(f"\n\nError writing week tabs HTML to {output_file}: {e}")
        return 1
    except Exception as e:
        print(f"\n\nError: {e}")
        traceback.print_exc()
        return 1


def main(argv=None):
    """Entry point for the week tabs pipeline"""
    parser = argparse.ArgumentParser(description='Render the JKU Mensa and KHG Mensa weekly menus as HTML tabs')
    parser.add_argument('--output', type=str, default=DEFAULT_OUTPUT,
                        help=f'Output HTML file (default: {DEFAULT_OUTPUT})')
    args = parser.parse_args(argv)

    return run(Path(args.output))


if __name__ == "__main__":
    sys.exit(main())
