from pathlib import Path

import pytest

MAIN_WINDOW = """
namespace Municipal
{
    public partial class MainWindow : Window
    {
        public MainWindow()
        {
            InitializeComponent();
        }

        private void btnReport_Click(object sender, RoutedEventArgs e)
        {
            var report = new ReportWindow();
            report.ShowDialog();
        }

        private void btnEvents_Click(object sender, RoutedEventArgs e)
        {
            // coming soon
        }

        private void txtNotes_TextChanged(object sender, TextChangedEventArgs e)
        {
            lblCount.Content = txtNotes.Text.Length.ToString();
        }
    }
}
"""


@pytest.fixture()
def municipal_project(tmp_path: Path) -> Path:
    """A tiny brace-language project with a marker file and build output to ignore."""
    (tmp_path / "Municipal.csproj").write_text("<Project Sdk=\"Microsoft.NET.Sdk\" />", encoding="utf-8")
    (tmp_path / "MainWindow.xaml.cs").write_text(MAIN_WINDOW, encoding="utf-8")
    stale = tmp_path / "obj" / "Debug"
    stale.mkdir(parents=True)
    (stale / "MainWindow.g.cs").write_text(
        "void btnReport_Click(object sender, RoutedEventArgs e) { Stale(); }",
        encoding="utf-8",
    )
    runtime_dir = tmp_path / "bin" / "Debug" / "net8.0-windows"
    runtime_dir.mkdir(parents=True)
    return tmp_path
