"""Utility package exports."""
from daily_brief.utils.http import create_session

__all__ = ['create_session']
