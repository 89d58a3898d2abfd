#!/usr/bin/env python3

import unittest

import bcvmdis
from bcvminstr import *

class TestBcvmDis(unittest.TestCase):
    def test_dis(self):
        prog = [const(-2), store('a'), load('a'), const(7), GE, jmp_if(0x1f), jmp(0), RET]
        expected = [
            "0000 CONST -2",
            "0001 STORE 'a'",
            "0002 LOAD 'a'",
            "0003 CONST 7",
            "0004 GE",
            "0005 JMP_IF 001f",
            "0006 JMP 0000",
            "0007 RET",
        ]
        self.assertEqual(bcvmdis.dis(prog), expected)

    def test_dis_empty(self):
        self.assertEqual(bcvmdis.dis([]), [])

    def test_format_inst(self):
        self.assertEqual(bcvmdis.format_inst(0x10, DIV), '0010 DIV')
