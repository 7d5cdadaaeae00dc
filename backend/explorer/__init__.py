"""Cardano blockchain explorer backend"""
