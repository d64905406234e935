# SitemapLens — utils package
# Author: Sachin Chhetri
# Year: 2025
# License: MIT
