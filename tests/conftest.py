"""Shared test fixtures for the extraction pipeline tests."""

from __future__ import annotations

import pytest


LOREM_SENTENCE = "Lorem ipsum dolor sit amet consectetur adipiscing elit sed do."
LOREM_60_WORDS = " ".join([LOREM_SENTENCE] * 6)


SAMPLE_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="utf-8">
    <title>Test Page Title</title>
    <script>console.log("noise");</script>
    <style>body { color: red; }</style>
</head>
<body>
    <header>
        <nav><a href="/about">About</a> <a href="/contact">Contact</a></nav>
    </header>
    <div class="sidebar">
        <ul class="menu"><li>Home</li><li>Archive</li></ul>
    </div>
    <article>
        <h1>Gardening in Small Spaces</h1>
        <p>Container gardening lets city dwellers grow tomatoes, herbs and peppers
        on balconies. Containers need drainage holes and good potting soil.</p>
        <h2>Choosing containers</h2>
        <p>Larger containers hold moisture longer, which means less watering during
        hot summer weeks. Terracotta containers breathe but dry out quickly!</p>
        <div class="advertisement">Buy cheap seeds now</div>
        <img src="/images/balcony.jpg" alt="A balcony garden" width="640" height="480">
        <img src="//cdn.example.com/herbs.png" title="Herb pots">
        <img data-src="seedlings.webp">
        <ul><li>Tomatoes</li><li>Basil</li></ul>
        <blockquote>Gardening is cheaper than therapy.</blockquote>
        <div class="social-share">Share on Twitter</div>
    </article>
    <div class="comments">Great post!</div>
    <div class="related-posts">Read more gardening posts</div>
    <footer>
        <p>&copy; 2024 Test Site</p>
    </footer>
</body>
</html>"""


ARTICLE_HTML = f"<article><h1>Title</h1><p>{LOREM_60_WORDS}</p></article>"


NAV_ONLY_HTML = "<html><body><nav>Menu</nav></body></html>"


@pytest.fixture
def sample_html() -> str:
    return SAMPLE_HTML


@pytest.fixture
def article_html() -> str:
    return ARTICLE_HTML


@pytest.fixture
def nav_only_html() -> str:
    return NAV_ONLY_HTML


@pytest.fixture
def lorem_60_words() -> str:
    return LOREM_60_WORDS
