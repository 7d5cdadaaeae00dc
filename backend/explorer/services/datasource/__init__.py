"""Upstream data sources"""
