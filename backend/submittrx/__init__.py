"""
SubmitTrx - Partner Transaction Submission Service

Validates signed partner transaction requests and computes tiered discounts.
"""

__version__ = "0.1.0"
