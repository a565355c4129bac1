#!/usr/bin/env python3
from dataclasses import dataclass
import os
from dotenv import load_dotenv

load_dotenv()

@dataclass
class Config:
    """Runtime settings"""
    loader: str = os.getenv("CURLSCRAPE_LOADER", "http").lower()
    timeout: float = float(os.getenv("CURLSCRAPE_TIMEOUT", "30"))
    user_agent: str = os.getenv("CURLSCRAPE_USER_AGENT", "curlscrape/0.1")
    html_parser: str = os.getenv("CURLSCRAPE_HTML_PARSER", "html.parser")
    headless: bool = os.getenv("CURLSCRAPE_HEADLESS", "true").lower() == "true"
    enable_debug: bool = os.getenv("CURLSCRAPE_DEBUG", "false").lower() == "true"

    # Browser loader: wait condition passed to page.goto
    wait_until: str = os.getenv("CURLSCRAPE_WAIT_UNTIL", "load")

config = Config()
