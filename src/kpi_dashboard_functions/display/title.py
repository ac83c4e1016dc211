from dataclasses import dataclass
from html import escape


@dataclass(frozen=True)
class PageTitle:
    title: str
    subtitle: str | None = None
    icon: str | None = None

    def render(self) -> str:
        """Render the title block; ``icon`` is trusted markup, text fields are escaped."""
        lines = ['<div class="mb-6">', '  <div class="flex items-center">']
        if self.icon:
            lines.append(f'    <div class="mr-3 text-cyan-400">{self.icon}</div>')
        lines.append(f'    <h1 class="text-3xl font-bold text-white">{escape(self.title)}</h1>')
        lines.append("  </div>")
        if self.subtitle:
            lines.append(f'  <p class="text-slate-400 mt-1 text-lg">{escape(self.subtitle)}</p>')
        lines.append("</div>")
        return "\n".join(lines)
