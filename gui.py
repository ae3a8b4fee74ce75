import locale
import tkinter as tk
from tkinter import ttk, messagebox

from utils.logger import setup_logger
from data.repository import DataRepository
from models.product import CATEGORIES, STATUS_OPTIONS, PRODUCT_CATEGORIES
from services.product_store import ProductStore
from services.inventory_service import InventoryService
from services.report_service import ReportService
from services.product_form import EDIT

FORM_FIELDS = (
    ("name", "Name:"),
    ("sku", "SKU:"),
    ("price", "Price:"),
    ("quantity", "Quantity:"),
    ("category", "Category:"),
)


class InventoryApp:
    def __init__(self, root: tk.Tk):
        # core services / data
        self.root = root
        self.root.title("Inventory Manager")
        self.root.geometry("900x600")

        self.logger = setup_logger()
        self.repo = DataRepository()
        self.store = ProductStore(self.repo)
        self.store.load()
        self.service = InventoryService(self.store)
        self.report_service = ReportService()

        self.form_window = None
        self.form_vars: dict[str, tk.StringVar] = {}
        self.form_error_labels: dict[str, ttk.Label] = {}

        self.build_filter_bar()
        self.build_products_table()
        self.build_actions_bar()

        # initial fill
        self.refresh_products_table()

    # FILTER BAR (search + category + status)

    def build_filter_bar(self):
        bar = ttk.LabelFrame(self.root, text="Filter")
        bar.pack(fill="x", padx=10, pady=(10, 0))

        ttk.Label(bar, text="Search:").grid(row=0, column=0, sticky="e", padx=5, pady=5)
        self.search_var = tk.StringVar()
        search_entry = ttk.Entry(bar, textvariable=self.search_var, width=30)
        search_entry.grid(row=0, column=1, sticky="w", padx=5, pady=5)
        # recompute on every keystroke
        self.search_var.trace_add("write", lambda *_: self.on_search_changed())

        ttk.Label(bar, text="Category:").grid(row=0, column=2, sticky="e", padx=5, pady=5)
        self.category_filter_var = tk.StringVar(value="All")
        category_box = ttk.Combobox(
            bar,
            textvariable=self.category_filter_var,
            values=CATEGORIES,
            state="readonly",
            width=14
        )
        category_box.grid(row=0, column=3, sticky="w", padx=5, pady=5)
        category_box.bind("<<ComboboxSelected>>", lambda _e: self.on_category_changed())

        ttk.Label(bar, text="Status:").grid(row=0, column=4, sticky="e", padx=5, pady=5)
        self.status_filter_var = tk.StringVar(value="All")
        status_box = ttk.Combobox(
            bar,
            textvariable=self.status_filter_var,
            values=STATUS_OPTIONS,
            state="readonly",
            width=14
        )
        status_box.grid(row=0, column=5, sticky="w", padx=5, pady=5)
        status_box.bind("<<ComboboxSelected>>", lambda _e: self.on_status_changed())

    def on_search_changed(self):
        self.service.set_search_text(self.search_var.get())
        self.refresh_products_table()

    def on_category_changed(self):
        self.service.set_category_filter(self.category_filter_var.get())
        self.refresh_products_table()

    def on_status_changed(self):
        self.service.set_status_filter(self.status_filter_var.get())
        self.refresh_products_table()

    # PRODUCT TABLE

    def build_products_table(self):
        frame = ttk.LabelFrame(self.root, text="Products")
        frame.pack(fill="both", expand=True, padx=10, pady=10)

        columns = ("name", "sku", "price", "quantity", "category", "status")
        self.products_tree = ttk.Treeview(
            frame,
            columns=columns,
            show="headings",
            selectmode="browse",
            height=14
        )
        self.products_tree.heading("name", text="Name")
        self.products_tree.heading("sku", text="SKU")
        self.products_tree.heading("price", text="Price")
        self.products_tree.heading("quantity", text="Quantity")
        self.products_tree.heading("category", text="Category")
        self.products_tree.heading("status", text="Status")
        self.products_tree.column("name", width=200)
        self.products_tree.column("sku", width=100)
        self.products_tree.column("price", width=80, anchor="e")
        self.products_tree.column("quantity", width=80, anchor="center")
        self.products_tree.column("category", width=110)
        self.products_tree.column("status", width=100, anchor="center")
        self.products_tree.pack(fill="both", expand=True, padx=5, pady=5)

        # double click a row to edit it
        self.products_tree.bind("<Double-1>", lambda _e: self.gui_edit_product())

        self.summary_label = ttk.Label(frame, text="")
        self.summary_label.pack(anchor="w", padx=5, pady=(0, 5))

    def build_actions_bar(self):
        bar = ttk.Frame(self.root)
        bar.pack(fill="x", padx=10, pady=(0, 10))

        ttk.Button(bar, text="Add Product", command=self.gui_add_product).pack(side="left", padx=5)
        ttk.Button(bar, text="Edit", command=self.gui_edit_product).pack(side="left", padx=5)
        ttk.Button(bar, text="Delete", command=self.gui_delete_product).pack(side="left", padx=5)

    def refresh_products_table(self):
        for row in self.products_tree.get_children():
            self.products_tree.delete(row)

        # row iid is the product id so selection maps straight back to the store
        for p in self.service.visible:
            self.products_tree.insert(
                "",
                "end",
                iid=p.id,
                values=(
                    p.name,
                    p.sku,
                    f"${p.price:.2f}",
                    p.quantity,
                    p.category,
                    p.status
                )
            )
        self.refresh_summary()

    def refresh_summary(self):
        summary = self.report_service.status_summary(self.store.products)
        low = self.report_service.low_stock(self.store.products)
        self.summary_label.config(
            text=(
                f"Showing {len(self.service.visible)} of {summary['products']} products  |  "
                f"In Stock: {summary['In Stock']}  Low Stock: {summary['Low Stock']}  "
                f"Out of Stock: {summary['Out of Stock']}  |  "
                f"Units: {summary['units']}  Value: ${summary['value']:.2f}  |  "
                f"Needs restock: {len(low)}"
            )
        )

    def selected_product_id(self) -> str | None:
        selection = self.products_tree.selection()
        if not selection:
            messagebox.showerror("Error", "Please select a product first.")
            return None
        return selection[0]

    # ADD / EDIT FORM (modal)

    def gui_add_product(self):
        draft = self.service.form.open_add()
        self.logger.info("GUI: opened add form")
        self.open_form_window("Add Product", draft)

    def gui_edit_product(self):
        product_id = self.selected_product_id()
        if product_id is None:
            return
        draft = self.service.form.open_edit(product_id)
        self.logger.info(f"GUI: opened edit form for {product_id}")
        self.open_form_window("Edit Product", draft)

    def open_form_window(self, title: str, draft):
        popup = tk.Toplevel(self.root)
        popup.title(title)
        popup.resizable(False, False)
        popup.transient(self.root)
        self.form_window = popup

        body = ttk.Frame(popup, padding=10)
        body.pack(fill="both", expand=True)

        self.form_vars = {}
        self.form_error_labels = {}
        for row, (name, label) in enumerate(FORM_FIELDS):
            ttk.Label(body, text=label).grid(row=row * 2, column=0, sticky="e", padx=5, pady=(5, 0))

            var = tk.StringVar(value=getattr(draft, name))
            if name == "category":
                widget = ttk.Combobox(
                    body,
                    textvariable=var,
                    values=PRODUCT_CATEGORIES,
                    state="readonly",
                    width=27
                )
            else:
                widget = ttk.Entry(body, textvariable=var, width=30)
            widget.grid(row=row * 2, column=1, sticky="w", padx=5, pady=(5, 0))

            # inline error text under each field
            error_label = tk.Label(body, text="", fg="#D32F2F")
            error_label.grid(row=row * 2 + 1, column=1, sticky="w", padx=5)

            self.form_vars[name] = var
            self.form_error_labels[name] = error_label

        btn_frame = ttk.Frame(popup)
        btn_frame.pack(pady=(0, 10))
        ttk.Button(btn_frame, text="Save", command=self.gui_save_form).pack(side="left", padx=5)
        ttk.Button(btn_frame, text="Cancel", command=self.gui_cancel_form).pack(side="left", padx=5)

        popup.protocol("WM_DELETE_WINDOW", self.gui_cancel_form)
        popup.grab_set()

    def close_form_window(self):
        if self.form_window is not None:
            self.form_window.grab_release()
            self.form_window.destroy()
        self.form_window = None

    def gui_cancel_form(self):
        self.service.form.cancel()
        self.close_form_window()
        self.logger.info("GUI: form cancelled")

    def gui_save_form(self):
        form = self.service.form
        # copy widget values into the draft
        for name, var in self.form_vars.items():
            setattr(form.draft, name, var.get())

        editing = form.mode == EDIT
        try:
            product = self.service.submit_form()
        except OSError as e:
            self.logger.exception(f"GUI: saving product failed: {e}")
            messagebox.showerror("Save Failed", str(e))
            return

        if product is None:
            for name, label in self.form_error_labels.items():
                label.config(text=form.errors.get(name, ""))
            self.logger.warning(f"GUI: product form rejected: {form.errors}")
            return

        self.logger.info(
            f"GUI: {'updated' if editing else 'added'} product {product.sku} ({product.name}), "
            f"price={product.price}, qty={product.quantity}, category={product.category}"
        )
        self.close_form_window()
        self.refresh_products_table()

    # DELETE

    def confirm_delete(self, product) -> bool:
        return messagebox.askyesno(
            "Delete Product",
            f"Delete {product.name} ({product.sku})?"
        )

    def gui_delete_product(self):
        product_id = self.selected_product_id()
        if product_id is None:
            return

        try:
            deleted = self.service.delete_product(product_id, self.confirm_delete)
        except OSError as e:
            self.logger.exception(f"GUI: delete failed: {e}")
            messagebox.showerror("Delete Failed", str(e))
            return

        if deleted:
            self.logger.info(f"GUI: deleted product {product_id}")
            self.refresh_products_table()


def main():
    logger = setup_logger()
    # name sorting collates with the user's locale
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error as e:
        logger.warning(f"GUI: could not apply system collation locale, using default: {e}")

    root = tk.Tk()
    app = InventoryApp(root)
    root.mainloop()


if __name__ == "__main__":
    main()
