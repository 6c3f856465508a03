from xaml_path2shape.cli.main import cli

if __name__ == "__main__":
    cli()
