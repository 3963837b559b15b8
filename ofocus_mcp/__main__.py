from ofocus_mcp.cli import main_entry

main_entry()
