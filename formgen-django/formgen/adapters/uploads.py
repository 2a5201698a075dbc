"""File upload and external resource pickers."""

from formgen.adapters.base import FieldAdapter, passthrough
from formgen.elements import h
from formgen.locales import translate


def _file_entries(value):
    if not value:
        return []
    items = value if isinstance(value, (list, tuple)) else [value]
    entries = []
    for item in items:
        if isinstance(item, dict):
            entries.append({"name": item.get("name") or item.get("url", ""), "url": item.get("url")})
        else:
            entries.append({"name": str(item), "url": None})
    return entries


class UploadAdapter(FieldAdapter):
    """File upload widget listing the files already bound to the field."""

    def control(self, bundle):
        field = bundle.field
        props = {
            "name": bundle.name,
            "multiple": bool(field.get("multiple", False)),
            "browseLabel": translate(bundle.locale, "upload.browse", "Browse files"),
            "disabled": bundle.is_disabled(),
        }
        props.update(passthrough(field, ("accept", "maxFileSize", "url", "chunkSize")))
        return h("Upload", props, self._file_list(bundle))

    def static_control(self, bundle):
        return h("FormControl.Static", {"name": bundle.name}, self._file_list(bundle))

    def _file_list(self, bundle):
        entries = _file_entries(bundle.value())
        if not entries:
            return h("HelpBlock", {}, translate(bundle.locale, "upload.empty", "No files selected"))
        return h(
            "FileList",
            {},
            [h("File", {"href": e["url"]}, e["name"], key=i) for i, e in enumerate(entries)],
        )


class ResourceAdapter(FieldAdapter):
    """Reference to an external resource, shown as a link with a picker trigger."""

    def control(self, bundle):
        return h(
            "Resource",
            {
                "name": bundle.name,
                "source": bundle.field.get("source"),
                "disabled": bundle.is_disabled(),
            },
            self._current(bundle),
        )

    def static_control(self, bundle):
        return h("FormControl.Static", {"name": bundle.name}, self._current(bundle))

    def _current(self, bundle):
        value = bundle.value()
        if isinstance(value, dict):
            return h("Link", {"href": value.get("url")}, value.get("desc") or value.get("url", ""))
        if value:
            return h("Link", {"href": str(value)}, str(value))
        return translate(bundle.locale, "resource.empty", "No resource selected")
