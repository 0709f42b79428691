"""
------------------------------------------------------------------------------
Project:        StartGrid
File:           startgrid/__init__.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Grid arrangement engine for the start-page. Contains the item
                model, collision classification, drag state machine, folder
                container rules and pagination.
------------------------------------------------------------------------------
"""
