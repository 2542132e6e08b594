"""
Test suite for the HH simulator with slow K+ adaptation.

Run tests with:
    pytest test/
    pytest test/ -v
    pytest test/ -k "physiological"
"""
