"""Test suite for tarefas."""
