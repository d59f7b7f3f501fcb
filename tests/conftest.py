"""Shared test setup for dxf_svg tests."""
import os
import sys

# Add the repository root so the package imports without installation
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
