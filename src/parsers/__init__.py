"""Extraction, segmentation and pipeline components for Chat Transcript Formatter"""
