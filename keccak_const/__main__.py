from keccak_const.cli import cli

if __name__ == "__main__":
    cli(prog_name="keccak-const")
