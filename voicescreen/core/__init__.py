"""
Core Package - scoring engine, analysis orchestration and reports
"""
